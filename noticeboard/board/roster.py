from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Sequence
from zoneinfo import ZoneInfo

from noticeboard.api.schemas import Message, Priority
from noticeboard.board.capabilities import Confirmer

EMPTY_STATE = "暂无留言...\n点击「添加留言」发布第一条留言吧！"
DELETE_PROMPT = "确定要删除这条留言吗？"


@dataclass(frozen=True)
class PriorityStyle:
    label: str
    icon: str
    severity: str


PRIORITY_STYLES: dict[str, PriorityStyle] = {
    Priority.URGENT.value: PriorityStyle("🔴 紧急", "🚨", "danger"),
    Priority.HIGH.value: PriorityStyle("🟠 高", "⚡", "warning"),
    Priority.NORMAL.value: PriorityStyle("🔵 普通", "📌", "info"),
    Priority.LOW.value: PriorityStyle("🟢 低", "📝", "muted"),
}
FALLBACK_STYLE = PRIORITY_STYLES[Priority.NORMAL.value]


def priority_style(priority: object) -> PriorityStyle:
    if isinstance(priority, Priority):
        priority = priority.value
    if isinstance(priority, str):
        return PRIORITY_STYLES.get(priority, FALLBACK_STYLE)
    return FALLBACK_STYLE


def priority_label(priority: object) -> str:
    return priority_style(priority).label


def priority_icon(priority: object) -> str:
    return priority_style(priority).icon


def priority_severity(priority: object) -> str:
    return priority_style(priority).severity


def format_timestamp(value: datetime, tz: ZoneInfo | None = None) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    if tz is not None:
        value = value.astimezone(tz)
    return value.strftime("%Y/%m/%d %H:%M")


class Roster:
    """Renders a message snapshot and gates per-item actions.

    The roster keeps no message state of its own; ``render`` is a pure
    function of the sequence it is given. Deletion asks the injected
    ``Confirmer`` first and only then hands the id to the delete callback.
    """

    def __init__(
        self,
        confirmer: Confirmer,
        tz: ZoneInfo | None = None,
        show_toggle: bool = True,
    ) -> None:
        self.confirmer = confirmer
        self.tz = tz
        self.show_toggle = show_toggle
        self.on_delete: Callable[[str], Awaitable[object]] | None = None
        self.on_toggle: Callable[[str], Awaitable[object]] | None = None

    def bind(
        self,
        on_delete: Callable[[str], Awaitable[object]],
        on_toggle: Callable[[str], Awaitable[object]] | None = None,
    ) -> None:
        self.on_delete = on_delete
        self.on_toggle = on_toggle

    def render(self, messages: Sequence[Message]) -> str:
        if not messages:
            return f"📝\n{EMPTY_STATE}"
        return "\n\n".join(self.render_card(message) for message in messages)

    def render_card(self, message: Message) -> str:
        style = priority_style(message.priority)
        lines = [
            f"[{style.severity}] {style.icon} {message.title}  ({style.label})",
            f"👤 {message.author} • 🕒 {format_timestamp(message.created_at, self.tz)}",
            message.content,
        ]
        if message.expires_at is not None:
            lines.append(f"⏳ 到期: {format_timestamp(message.expires_at, self.tz)}")
        actions = f"🗑️ 删除 [{message.id}]"
        if self.show_toggle and message.enabled is not None:
            state = "✅ 已启用" if message.enabled else "⏸️ 已停用"
            toggle = "停用" if message.enabled else "启用"
            actions = f"{state} | {toggle} [{message.id}] | {actions}"
        lines.append(actions)
        return "\n".join(lines)

    async def request_delete(self, message_id: str) -> bool:
        if self.on_delete is None:
            raise RuntimeError("Roster has no delete handler bound")
        if not self.confirmer.confirm(DELETE_PROMPT):
            return False
        await self.on_delete(message_id)
        return True

    async def request_toggle(self, message_id: str) -> bool:
        if not self.show_toggle or self.on_toggle is None:
            return False
        await self.on_toggle(message_id)
        return True
