from typing import Any

from mind_mirror.shared.errors import ValidationError

MAX_TEXT_LENGTH = 10000

EMPTY_TEXT_MESSAGE = "Please provide valid text to analyze"
TEXT_TOO_LONG_MESSAGE = "Text is too long. Maximum {limit:,} characters allowed."


def validate_text(text: Any, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Check submitted text before any remote call and return it trimmed.

    Raises:
        ValidationError: if the text is missing, not a string, blank, or
            longer than ``max_length`` characters (measured before trimming).
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError(EMPTY_TEXT_MESSAGE)
    if len(text) > max_length:
        raise ValidationError(TEXT_TOO_LONG_MESSAGE.format(limit=max_length))
    return text.strip()
