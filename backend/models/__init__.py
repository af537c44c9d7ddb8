from models.question import PublicQuestion, QuizQuestion
from models.session import Session
from models.user import Credentials, User

__all__ = ["PublicQuestion", "QuizQuestion", "Session", "Credentials", "User"]
