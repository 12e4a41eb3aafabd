"""Satisfaction rating extraction from survey responses"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from .bucketing import ValueExtractor, round_half_up

RATING_QUESTION_TYPE = "rating"

RATING_SCALE = {"1": 1, "2": 2, "3": 3, "4": 4, "5": 5}

# Labels written by surveys built before the numeric rating question existed
LEGACY_RATING_LABELS = {
    "Excellent": 5,
    "Good": 4,
    "Average": 3,
    "Poor": 2,
    "Very Poor": 1,
}


def find_rating_question(questions: Optional[Iterable[Mapping[str, Any]]]) -> Optional[Mapping[str, Any]]:
    """Return the first rating-type question of a survey, if any"""
    for question in questions or []:
        if isinstance(question, Mapping) and question.get("type") == RATING_QUESTION_TYPE:
            return question
    return None


def rating_value(answer: Any) -> Optional[int]:
    """
    Map a raw answer to a 1-5 rating.

    Numeric strings ("1".."5"), legacy labels and in-range numbers are
    accepted; anything else yields None.
    """
    if isinstance(answer, bool):
        return None
    if isinstance(answer, (int, float)):
        return int(answer) if float(answer).is_integer() and 1 <= answer <= 5 else None
    if isinstance(answer, str):
        text = answer.strip()
        if text in RATING_SCALE:
            return RATING_SCALE[text]
        return LEGACY_RATING_LABELS.get(text)
    return None


def satisfaction_extractor(questions_by_survey: Mapping[int, Iterable[Mapping[str, Any]]]) -> ValueExtractor:
    """
    Build an extractor that reads the rating answer of a survey response.

    Args:
        questions_by_survey: survey id -> that survey's question definitions

    Returns:
        Callable mapping a response to its 1-5 rating, or None when the
        survey has no rating question or the answer is not a rating
    """
    rating_question_ids = {}
    for survey_id, questions in questions_by_survey.items():
        question = find_rating_question(questions)
        if question is not None and question.get("id") is not None:
            rating_question_ids[survey_id] = str(question["id"])

    def extract(response) -> Optional[int]:
        question_id = rating_question_ids.get(response.survey_id)
        if question_id is None:
            return None
        answers = response.answers or {}
        return rating_value(answers.get(question_id))

    return extract


def average_rating(values: Iterable[Optional[float]]) -> float:
    """Mean of the non-null ratings, one decimal; 0 when there are none"""
    ratings = [value for value in values if value is not None]
    if not ratings:
        return 0
    return round_half_up(sum(ratings) / len(ratings))
