"""
Quiz scoring.

A submission maps question ids to selected option indexes. The score is
recomputed from scratch on every call: one point per catalog question whose
selection is a number equal to the answer key. Missing or malformed entries
score nothing and never raise.
"""

from typing import Any, Iterable, Mapping

from models.question import QuizQuestion


def _selection_for(answers: Mapping[Any, Any], question_id: int) -> Any:
    # JSON object keys arrive as strings; direct callers may use ints
    key = str(question_id)
    if key in answers:
        return answers[key]
    return answers.get(question_id)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a numeric answer
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def compute_score(questions: Iterable[QuizQuestion], answers: Mapping[Any, Any]) -> int:
    score = 0
    for question in questions:
        selection = _selection_for(answers, question.id)
        if _is_number(selection) and selection == question.correct_option_index:
            score += 1
    return score


def score_message(score: int, total: int) -> str:
    return f"You scored {score}/{total}"
