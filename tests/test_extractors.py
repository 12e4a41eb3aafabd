"""Tests for satisfaction rating extraction"""

from types import SimpleNamespace

import pytest

from crm.analytics.extractors import (
    average_rating,
    find_rating_question,
    rating_value,
    satisfaction_extractor,
)

RATED_SURVEY = [
    {"id": "q1", "type": "text", "question": "Your name?"},
    {"id": "q2", "type": "rating", "question": "How satisfied are you?"},
    {"id": "q3", "type": "rating", "question": "Would you recommend us?"},
]

UNRATED_SURVEY = [
    {"id": "q1", "type": "select", "question": "Favourite drink?", "options": ["Tea", "Coffee"]},
]


def response(survey_id, answers):
    return SimpleNamespace(survey_id=survey_id, answers=answers)


@pytest.mark.parametrize(
    "answer,expected",
    [
        ("1", 1),
        ("5", 5),
        (" 3 ", 3),
        ("Excellent", 5),
        ("Very Poor", 1),
        (4, 4),
        (2.0, 2),
        ("6", None),
        ("0", None),
        (4.5, None),
        (7, None),
        (True, None),
        ("great", None),
        (None, None),
        (["5"], None),
    ],
)
def test_rating_value(answer, expected):
    assert rating_value(answer) == expected


def test_find_rating_question_returns_first_rating():
    assert find_rating_question(RATED_SURVEY)["id"] == "q2"
    assert find_rating_question(UNRATED_SURVEY) is None
    assert find_rating_question(None) is None
    assert find_rating_question(["not-a-question"]) is None


def test_extractor_reads_rating_question_answer():
    extract = satisfaction_extractor({1: RATED_SURVEY, 2: UNRATED_SURVEY})

    assert extract(response(1, {"q1": "Ann", "q2": "4", "q3": "1"})) == 4
    assert extract(response(1, {"q2": "Good"})) == 4


def test_extractor_returns_none_without_rating_question():
    extract = satisfaction_extractor({1: RATED_SURVEY, 2: UNRATED_SURVEY})

    assert extract(response(2, {"q1": "Tea"})) is None
    # survey not in the mapping at all
    assert extract(response(99, {"q2": "5"})) is None


def test_extractor_returns_none_for_unmapped_or_missing_answer():
    extract = satisfaction_extractor({1: RATED_SURVEY})

    assert extract(response(1, {"q2": "meh"})) is None
    assert extract(response(1, {"q1": "Ann"})) is None
    assert extract(response(1, None)) is None


def test_extractor_matches_numeric_question_ids():
    extract = satisfaction_extractor({1: [{"id": 7, "type": "rating", "question": "Score"}]})

    assert extract(response(1, {"7": "5"})) == 5


def test_average_rating():
    assert average_rating([5, 4, 2, None]) == 3.7
    assert average_rating([None, None]) == 0
    assert average_rating([]) == 0
