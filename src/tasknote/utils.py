from datetime import UTC, datetime

import nh3


def now() -> datetime:
    return datetime.now(UTC)


def sanitize_text(value: str) -> str:
    """Strip surrounding whitespace and remove embedded markup (script/style contents included).

    The result is HTML-escaped text: a literal `&` comes back as `&amp;`, and
    length limits apply to that escaped form.
    """
    return nh3.clean(value.strip(), tags=set()).strip()
