import os

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from config import Settings
from deps import get_settings
from errors import InternalError

router = APIRouter(tags=["frontend"])

INDEX_FILE = "index.html"


def _resolve_static(static_dir: str, path: str):
    """An existing file inside static_dir, or None. Never escapes the directory."""
    if not path:
        return None
    try:
        candidate = os.path.realpath(os.path.join(static_dir, path))
        if os.path.commonpath([static_dir, candidate]) != static_dir:
            return None
        return candidate if os.path.isfile(candidate) else None
    except ValueError:
        # embedded NUL byte
        return None


@router.get("/{path:path}", include_in_schema=False)
async def frontend(path: str, settings: Settings = Depends(get_settings)):
    """
    Must be included last: anything the API routes did not claim lands here.
    """
    static_dir = os.path.realpath(settings.STATIC_DIR)
    asset = _resolve_static(static_dir, path)
    if asset is not None:
        return FileResponse(asset)

    index = os.path.join(static_dir, INDEX_FILE)
    if not os.path.isfile(index):
        raise InternalError("Frontend not found")
    return FileResponse(index)
