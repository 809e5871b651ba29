from __future__ import annotations

from datetime import datetime
from typing import Awaitable, Callable

from noticeboard.api.schemas import CreateMessageRequest, Priority
from noticeboard.board.capabilities import Prompter
from noticeboard.board.roster import priority_label
from noticeboard.services.validators import ValidationError, validate_required_fields

REQUIRED_FIELDS_PROMPT = "请填写所有必填字段"

SubmitHandler = Callable[[CreateMessageRequest], Awaitable[bool]]
CancelHandler = Callable[[], None]


class Composer:
    """Form state for a new message.

    ``submit`` runs the required-field check locally; an invalid form never
    reaches the submit handler. Fields are reset only once the handler
    reports the message as accepted, so a failed create can be retried
    without re-entering anything.
    """

    def __init__(
        self,
        on_submit: SubmitHandler,
        on_cancel: CancelHandler,
        prompter: Prompter,
    ) -> None:
        self.on_submit = on_submit
        self.on_cancel = on_cancel
        self.prompter = prompter
        self.reset()

    def reset(self) -> None:
        self.title = ""
        self.content = ""
        self.author = ""
        self.priority = Priority.NORMAL
        self.expires_at: datetime | None = None

    def set_field(self, name: str, value: str | datetime | Priority | None) -> None:
        if name == "priority":
            # Raises ValueError for anything outside the enumeration.
            self.priority = Priority(value)
        elif name == "expires_at":
            if isinstance(value, str):
                value = datetime.fromisoformat(value) if value.strip() else None
            self.expires_at = value
        elif name in ("title", "content", "author"):
            setattr(self, name, value or "")
        else:
            raise KeyError(f"Unknown form field: {name}")

    async def submit(self) -> bool:
        try:
            fields = validate_required_fields(
                {"title": self.title, "content": self.content, "author": self.author}
            )
        except ValidationError:
            self.prompter.alert(REQUIRED_FIELDS_PROMPT)
            return False

        request = CreateMessageRequest(
            **fields, priority=self.priority, expires_at=self.expires_at
        )
        accepted = await self.on_submit(request)
        if accepted:
            self.reset()
        return accepted

    def cancel(self) -> None:
        self.reset()
        self.on_cancel()

    def render(self) -> str:
        lines = [
            "✏️ 添加新留言",
            f"📝 标题 *: {self.title}",
            f"💬 内容 *: {self.content}",
            f"👤 作者 *: {self.author}",
            f"🎯 优先级: {priority_label(self.priority)}",
        ]
        if self.expires_at is not None:
            lines.append(f"⏳ 到期: {self.expires_at.isoformat()}")
        return "\n".join(lines)
