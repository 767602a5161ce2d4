"""
Input contract for review analysis requests
"""

from typing import Any, Optional

from config import get_config

REVIEW_REQUIRED_MESSAGE = "Review text is required and must be a string"


class ReviewValidationError(ValueError):
    """Client input rejected before classification."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def too_short_message(min_length: int) -> str:
    return f"Review must be at least {min_length} characters long"


def validate_review(payload: Any, min_length: Optional[int] = None) -> str:
    """
    Extract and check the ``review`` field of a request body.

    Returns the review text unchanged (untrimmed) when it is acceptable,
    otherwise raises ``ReviewValidationError`` with the client-facing
    message.
    """
    if min_length is None:
        min_length = get_config().MIN_REVIEW_LENGTH

    review = payload.get("review") if isinstance(payload, dict) else None

    if not review or not isinstance(review, str):
        raise ReviewValidationError(REVIEW_REQUIRED_MESSAGE)

    if len(review.strip()) < min_length:
        raise ReviewValidationError(too_short_message(min_length))

    return review
