from tasknote.errors import ValidationError
from tasknote.utils import sanitize_text

MAX_NOTE_TITLE_LENGTH = 100


def validate_note_title(title: str) -> str:
    """Return the sanitized note title.

    Raises:
        ValidationError: If the sanitized title is empty or too long
    """
    cleaned = sanitize_text(title)
    if not cleaned or len(cleaned) > MAX_NOTE_TITLE_LENGTH:
        raise ValidationError(f"Title is required and must be at most {MAX_NOTE_TITLE_LENGTH} characters")
    return cleaned
