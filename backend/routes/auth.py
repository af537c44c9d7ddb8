import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from config import Settings
from deps import (
    clear_session_cookie,
    current_session,
    get_sessions,
    get_settings,
    get_signer,
    get_users,
    read_credentials,
    session_token,
    set_session_cookie,
)
from errors import ConflictError, InternalError, InvalidCredentials, ValidationError
from models.session import Session
from models.user import Credentials
from security import CookieSigner, hash_password, password_too_long, verify_password
from store.base import UserDirectory
from store.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


# ---------- Response schemas ----------

class AuthResponse(BaseModel):
    message: str
    username: str


class MessageResponse(BaseModel):
    message: str


class MeResponse(BaseModel):
    authenticated: bool
    username: Optional[str] = None
    score: Optional[int] = None


# ---------- Endpoints ----------

@router.post("/register", response_model=AuthResponse)
async def register(
    response: Response,
    body: Credentials = Depends(read_credentials),
    token: Optional[str] = Depends(session_token),
    users: UserDirectory = Depends(get_users),
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
    signer: CookieSigner = Depends(get_signer),
):
    """
    Creates the user and logs them straight in with a fresh session (score 0).
    """
    if not body.username or not body.password:
        raise ValidationError("Username and password required")
    if password_too_long(body.password):
        raise ValidationError("Password must be at most 72 bytes")

    # Checked before hashing; the store checks again on create
    if await users.get_by_username(body.username) is not None:
        raise ConflictError()

    password_hash = await hash_password(body.password, rounds=settings.BCRYPT_ROUNDS)
    user = await users.create(body.username, password_hash)

    sessions.destroy(token)
    session = sessions.create(user, score=0)
    set_session_cookie(response, session, settings, signer)

    logger.info("Registered user %r", user.username)
    return AuthResponse(message="Registered and logged in", username=user.username)


@router.post("/login", response_model=AuthResponse)
async def login(
    response: Response,
    body: Credentials = Depends(read_credentials),
    token: Optional[str] = Depends(session_token),
    users: UserDirectory = Depends(get_users),
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
    signer: CookieSigner = Depends(get_signer),
):
    """
    Unknown username and wrong password fail identically.
    The new session's score follows LOGIN_SCORE_POLICY.
    """
    if not body.username or not body.password:
        raise InvalidCredentials()

    user = await users.get_by_username(body.username)
    if user is None or not await verify_password(body.password, user.password_hash):
        logger.warning("Failed login for %r", body.username)
        raise InvalidCredentials()

    score = user.score if settings.LOGIN_SCORE_POLICY == "restore" else 0

    sessions.destroy(token)
    session = sessions.create(user, score=score)
    set_session_cookie(response, session, settings, signer)

    logger.info("User %r logged in", user.username)
    return AuthResponse(message="Logged in", username=user.username)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: Optional[str] = Depends(session_token),
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    """Idempotent: the cookie is cleared whether or not a session existed."""
    try:
        removed = sessions.destroy(token)
    except Exception as exc:
        logger.exception("Session destruction failed")
        raise InternalError("Logout failed") from exc

    clear_session_cookie(response, settings)
    if removed:
        logger.info("Session logged out")
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=MeResponse, response_model_exclude_none=True)
async def me(session: Optional[Session] = Depends(current_session)):
    if session is None:
        return MeResponse(authenticated=False)
    return MeResponse(authenticated=True, username=session.username, score=session.score)
