from tasknote.core.modules.task.models import TaskPriority, TaskStatus
from tasknote.errors import ValidationError
from tasknote.utils import sanitize_text

MAX_TASK_TITLE_LENGTH = 255


def validate_task_title(title: str) -> str:
    """Return the sanitized task title.

    Raises:
        ValidationError: If the sanitized title is empty or too long
    """
    cleaned = sanitize_text(title)
    if not cleaned or len(cleaned) > MAX_TASK_TITLE_LENGTH:
        raise ValidationError(f"Title is required and must be at most {MAX_TASK_TITLE_LENGTH} characters")
    return cleaned


def parse_status(value: str) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise ValidationError(f"Invalid status '{value}', allowed: {allowed}") from None


def parse_priority(value: str) -> TaskPriority:
    try:
        return TaskPriority(value)
    except ValueError:
        raise ValidationError(f"Invalid priority '{value}', allowed: '' or 'high'") from None
