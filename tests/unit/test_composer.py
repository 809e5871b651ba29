from __future__ import annotations

from datetime import datetime, timezone

import pytest

from noticeboard.api.schemas import CreateMessageRequest, Priority
from noticeboard.board.composer import REQUIRED_FIELDS_PROMPT, Composer
from tests.fakes import RecordingPrompter


class SubmitRecorder:
    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.requests: list[CreateMessageRequest] = []

    async def __call__(self, request: CreateMessageRequest) -> bool:
        self.requests.append(request)
        return self.accept


def make_composer(
    prompter: RecordingPrompter, accept: bool = True
) -> tuple[Composer, SubmitRecorder, list[str]]:
    recorder = SubmitRecorder(accept)
    cancelled: list[str] = []
    composer = Composer(recorder, lambda: cancelled.append("cancel"), prompter)
    return composer, recorder, cancelled


def fill(composer: Composer, title: str, content: str, author: str) -> None:
    composer.set_field("title", title)
    composer.set_field("content", content)
    composer.set_field("author", author)


async def test_valid_submit_hands_trimmed_request_and_resets(prompter: RecordingPrompter) -> None:
    composer, recorder, _ = make_composer(prompter)
    fill(composer, "  Hi ", "there", " Bob")
    composer.set_field("priority", "high")

    assert await composer.submit() is True

    assert len(recorder.requests) == 1
    request = recorder.requests[0]
    assert (request.title, request.content, request.author) == ("Hi", "there", "Bob")
    assert request.priority is Priority.HIGH
    assert prompter.alerts == []
    assert (composer.title, composer.content, composer.author) == ("", "", "")
    assert composer.priority is Priority.NORMAL


@pytest.mark.parametrize(
    ("title", "content", "author"),
    [("", "there", "Bob"), ("Hi", "   ", "Bob"), ("Hi", "there", "\t"), ("", "", "")],
)
async def test_invalid_submit_alerts_and_keeps_fields(
    prompter: RecordingPrompter, title: str, content: str, author: str
) -> None:
    composer, recorder, _ = make_composer(prompter)
    fill(composer, title, content, author)

    assert await composer.submit() is False

    assert recorder.requests == []
    assert prompter.alerts == [REQUIRED_FIELDS_PROMPT]
    assert (composer.title, composer.content, composer.author) == (title, content, author)


async def test_rejected_submit_keeps_fields(prompter: RecordingPrompter) -> None:
    composer, recorder, _ = make_composer(prompter, accept=False)
    fill(composer, "Hi", "there", "Bob")
    composer.set_field("priority", Priority.URGENT)

    assert await composer.submit() is False

    assert len(recorder.requests) == 1
    assert composer.title == "Hi"
    assert composer.priority is Priority.URGENT


def test_cancel_resets_and_notifies(prompter: RecordingPrompter) -> None:
    composer, _, cancelled = make_composer(prompter)
    fill(composer, "Hi", "there", "Bob")
    composer.cancel()
    assert cancelled == ["cancel"]
    assert composer.title == ""


def test_priority_outside_enumeration_is_rejected(prompter: RecordingPrompter) -> None:
    composer, _, _ = make_composer(prompter)
    with pytest.raises(ValueError):
        composer.set_field("priority", "critical")
    assert composer.priority is Priority.NORMAL


def test_unknown_field_is_rejected(prompter: RecordingPrompter) -> None:
    composer, _, _ = make_composer(prompter)
    with pytest.raises(KeyError):
        composer.set_field("id", "1")


async def test_expiry_is_parsed_and_sent(prompter: RecordingPrompter) -> None:
    composer, recorder, _ = make_composer(prompter)
    fill(composer, "Hi", "there", "Bob")
    composer.set_field("expires_at", "2024-06-01T12:00:00+00:00")

    assert "⏳ 到期" in composer.render()
    await composer.submit()

    assert recorder.requests[0].expires_at == datetime(2024, 6, 1, 12, tzinfo=timezone.utc)
    assert composer.expires_at is None


def test_render_shows_current_fields(prompter: RecordingPrompter) -> None:
    composer, _, _ = make_composer(prompter)
    fill(composer, "Hi", "there", "Bob")
    output = composer.render()
    assert "📝 标题 *: Hi" in output
    assert "🎯 优先级: 🔵 普通" in output
