"""
The quiz catalog: fixed at import time, never mutated at runtime.
"""

from models.question import QuizQuestion

QUIZ_QUESTIONS: tuple[QuizQuestion, ...] = (
    QuizQuestion(
        id=1,
        prompt="Which piece moves in an L-shape in chess?",
        options=("Bishop", "Knight", "Rook", "Queen"),
        correct_option_index=1,
    ),
    QuizQuestion(
        id=2,
        prompt="How many squares are on a chessboard?",
        options=("64", "72", "56", "48"),
        correct_option_index=0,
    ),
    QuizQuestion(
        id=3,
        prompt="Which piece can castle with the king?",
        options=("Queen", "Rook", "Bishop", "Knight"),
        correct_option_index=1,
    ),
)
