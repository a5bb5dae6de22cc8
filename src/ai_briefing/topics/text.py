"""Text helpers for topic synthesis."""

ELLIPSIS = "…"


def short(text: str | None, max_len: int) -> str:
    """Trim text and cut it to a maximum length.

    Args:
        text: Text to shorten.
        max_len: Maximum length of the result.

    Returns:
        Trimmed text; if longer than ``max_len``, its first ``max_len - 1``
        characters with trailing whitespace removed, followed by an ellipsis.
    """
    value = (text or "").strip()
    if len(value) <= max_len:
        return value
    return value[: max_len - 1].rstrip() + ELLIPSIS


def capitalize_first(token: str) -> str:
    """Uppercase the first character only."""
    return token[:1].upper() + token[1:]
