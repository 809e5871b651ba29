from __future__ import annotations

REQUIRED_FIELDS: tuple[str, ...] = ("title", "content", "author")


class ValidationError(Exception):
    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


def normalize_field(value: str | None) -> str:
    if value is None:
        return ""
    return value.strip()


def validate_required_fields(fields: dict[str, str | None]) -> dict[str, str]:
    """Trim the required text fields and reject any that end up empty.

    Returns the trimmed values keyed by field name.
    """
    normalized = {name: normalize_field(fields.get(name)) for name in REQUIRED_FIELDS}
    details = [f"{name} must not be empty" for name, value in normalized.items() if not value]
    if details:
        raise ValidationError("Missing required fields", details)
    return normalized
