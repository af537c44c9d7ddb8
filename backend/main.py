from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, get_settings
from errors import register_error_handlers
from routes import auth, frontend, quiz
from security import CookieSigner
from store import SessionStore, UserDirectory, build_user_directory

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    users: Optional[UserDirectory] = None,
    sessions: Optional[SessionStore] = None,
) -> FastAPI:
    """
    Build the app. Tests pass their own settings and stores; the module-level
    `app` below uses the environment.
    """
    settings = settings or get_settings()
    if users is None:
        users = build_user_directory(settings)
    if sessions is None:
        sessions = SessionStore(max_age=settings.SESSION_MAX_AGE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await users.startup()
        yield
        await users.shutdown()

    app = FastAPI(title="Quiz API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.users = users
    app.state.sessions = sessions
    app.state.signer = CookieSigner(settings.SESSION_SECRET, max_age=settings.SESSION_MAX_AGE)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/api/health")
    def health():
        return {"status": "ok", "service": "quiz-api"}

    app.include_router(auth.router)
    app.include_router(quiz.router)
    # Catch-all GET; must stay last
    app.include_router(frontend.router)

    return app


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    logger.info("Server running at http://localhost:%d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
