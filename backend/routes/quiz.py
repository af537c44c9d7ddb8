import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from catalog import QUIZ_QUESTIONS
from deps import get_sessions, get_users, require_session
from errors import ValidationError
from models.question import PublicQuestion
from models.session import Session
from scoring.engine import compute_score, score_message
from store.base import UserDirectory
from store.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quiz", tags=["quiz"])


# ---------- Request / Response schemas ----------

class QuestionsResponse(BaseModel):
    questions: list[PublicQuestion]


class SubmitRequest(BaseModel):
    answers: Any = None     # validated by hand so a bad shape is a 400, not a 422


class SubmitResponse(BaseModel):
    score: int
    total: int
    message: str


# ---------- Endpoints ----------

@router.get("/questions", response_model=QuestionsResponse)
async def list_questions(session: Session = Depends(require_session)):
    """The catalog with every answer key stripped."""
    return QuestionsResponse(questions=[q.redacted() for q in QUIZ_QUESTIONS])


@router.post("/submit", response_model=SubmitResponse)
async def submit_answers(
    body: Optional[SubmitRequest] = Body(default=None),
    session: Session = Depends(require_session),
    users: UserDirectory = Depends(get_users),
    sessions: SessionStore = Depends(get_sessions),
):
    """
    Scores the whole submission from scratch and records the result on both
    the session and the user record.
    """
    if body is None or not isinstance(body.answers, dict):
        raise ValidationError("Answers required")

    score = compute_score(QUIZ_QUESTIONS, body.answers)
    total = len(QUIZ_QUESTIONS)

    await users.update_score(session.user_id, score)
    sessions.record_score(session.token, score)

    logger.info("User %r scored %d/%d", session.username, score, total)
    return SubmitResponse(score=score, total=total, message=score_message(score, total))
