"""
FastAPI dependencies.

The session is handed to handlers as an explicit parameter:
  session: Session = Depends(require_session)
Collaborators (settings, stores, signer) hang off app.state, set by create_app().
"""

from typing import Optional

import pydantic
from fastapi import Depends, Request, Response

from config import Settings
from errors import Unauthorized, ValidationError
from models.session import Session
from models.user import Credentials
from security import CookieSigner
from store.base import UserDirectory
from store.sessions import SessionStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_users(request: Request) -> UserDirectory:
    return request.app.state.users


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_signer(request: Request) -> CookieSigner:
    return request.app.state.signer


def session_token(
    request: Request,
    settings: Settings = Depends(get_settings),
    signer: CookieSigner = Depends(get_signer),
) -> Optional[str]:
    """The verified token from the session cookie, or None."""
    return signer.unsign(request.cookies.get(settings.SESSION_COOKIE_NAME))


def current_session(
    token: Optional[str] = Depends(session_token),
    sessions: SessionStore = Depends(get_sessions),
) -> Optional[Session]:
    return sessions.get(token)


def require_session(session: Optional[Session] = Depends(current_session)) -> Session:
    if session is None:
        raise Unauthorized()
    return session


# ---------- Request bodies ----------

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_credentials(request: Request) -> Credentials:
    """
    Username and password from a JSON or form-encoded body.
    An empty body yields empty credentials; the handler decides what that means.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            return Credentials.model_validate(dict(form))
        raw = await request.body()
        if not raw:
            return Credentials()
        return Credentials.model_validate_json(raw)
    except pydantic.ValidationError as exc:
        raise ValidationError("Invalid request body") from exc


# ---------- Cookie helpers ----------

def set_session_cookie(response: Response, session: Session, settings: Settings, signer: CookieSigner) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=signer.sign(session.token),
        max_age=settings.SESSION_MAX_AGE,
        httponly=True,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/", httponly=True, samesite="lax")
