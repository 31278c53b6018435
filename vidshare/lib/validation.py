"""Input normalisation shared by the services."""

from vidshare.lib.exceptions import ValidationError


def clean_text(value: str | None) -> str | None:
    """Strip whitespace, mapping blank input to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_text(value: str | None, message: str, max_length: int | None = None, too_long: str | None = None) -> str:
    """Return stripped ``value`` or fail with ``message`` when it is blank."""
    cleaned = clean_text(value)
    if cleaned is None:
        raise ValidationError(message)
    if max_length is not None and len(cleaned) > max_length:
        raise ValidationError(too_long or f"Must be at most {max_length} characters")
    return cleaned
