"""Shared validation utilities"""

import re
from typing import Any, Optional

from ..models import QUESTION_TYPES

CHOICE_QUESTION_TYPES = {"select", "radio", "checkbox"}


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Normalise a phone number to digits with an optional leading +.

    Raises:
        ValueError: If fewer than 7 or more than 15 digits remain
    """
    if not phone:
        return phone

    phone = phone.strip()
    digits = re.sub(r"\D", "", phone)
    if not 7 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 7 and 15 digits")

    return f"+{digits}" if phone.startswith("+") else digits


def validate_questions(questions: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Validate survey question definitions.

    Every question needs a unique id, a known type and question text;
    choice questions need at least one option.

    Raises:
        ValueError: On the first invalid question
    """
    if not questions:
        raise ValueError("At least one question is required")

    seen_ids = set()
    for index, question in enumerate(questions):
        question_id = question.get("id")
        if question_id in (None, ""):
            raise ValueError(f"Question {index + 1} is missing an id")
        question_id = str(question_id)
        if question_id in seen_ids:
            raise ValueError(f"Duplicate question id: {question_id}")
        seen_ids.add(question_id)

        if question.get("type") not in QUESTION_TYPES:
            raise ValueError(f"Question {question_id} has unsupported type: {question.get('type')}")
        if not str(question.get("question") or "").strip():
            raise ValueError(f"Question {question_id} has no text")
        if question["type"] in CHOICE_QUESTION_TYPES and not question.get("options"):
            raise ValueError(f"Question {question_id} needs at least one option")

        question["id"] = question_id

    return questions
