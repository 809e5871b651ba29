from __future__ import annotations

import pytest

from noticeboard.services.validators import (
    ValidationError,
    normalize_field,
    validate_required_fields,
)


def test_normalize_field() -> None:
    assert normalize_field("  Hello  ") == "Hello"
    assert normalize_field("\tline\n") == "line"
    assert normalize_field(None) == ""


def test_validate_required_fields_ok() -> None:
    fields = validate_required_fields({"title": " Hi ", "content": "there", "author": "Bob "})
    assert fields == {"title": "Hi", "content": "there", "author": "Bob"}


def test_validate_required_fields_failures() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_required_fields({"title": "   ", "content": "there", "author": "Bob"})
    assert exc.value.details == ["title must not be empty"]

    with pytest.raises(ValidationError) as exc2:
        validate_required_fields({"title": "Hi", "content": "\n", "author": None})
    assert "content must not be empty" in exc2.value.details
    assert "author must not be empty" in exc2.value.details


def test_validate_ignores_extra_fields() -> None:
    fields = validate_required_fields(
        {"title": "Hi", "content": "there", "author": "Bob", "priority": ""}
    )
    assert "priority" not in fields
