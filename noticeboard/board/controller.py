from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from noticeboard.api.schemas import CreateMessageRequest, Message
from noticeboard.board.capabilities import Prompter
from noticeboard.board.composer import Composer
from noticeboard.board.roster import Roster
from noticeboard.core.logging import operation_ctx
from noticeboard.observability.metrics import record_operation
from noticeboard.services.errors import FeatureDisabledError, StoreError
from noticeboard.services.store import MessageStore

logger = logging.getLogger(__name__)

BOARD_TITLE = "🏠 家庭留言板"
BOARD_SUBTITLE = "温馨留言，传递关爱"
LOADING_TEXT = "加载中..."

FETCH_FAILED = "Failed to fetch messages"
CREATE_FAILED = "Failed to create message"
DELETE_FAILED = "Failed to delete message"
TOGGLE_FAILED = "Failed to toggle message status"


class BoardPhase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FORM_OPEN = "form_open"


@dataclass(frozen=True)
class BoardFeatures:
    toggle_enabled: bool = True


class BoardController:
    """Owns the message snapshot and is the only path to the remote store.

    The snapshot is either empty while the first load is pending or exactly
    what the last successful ``GET`` returned. Mutations never touch it; a
    successful mutation is always followed by one full reload.
    """

    def __init__(
        self,
        store: MessageStore,
        roster: Roster,
        prompter: Prompter,
        features: BoardFeatures | None = None,
    ) -> None:
        self.store = store
        self.roster = roster
        self.prompter = prompter
        self.features = features or BoardFeatures()

        self.messages: tuple[Message, ...] = ()
        self.loading = True
        self.error: str | None = None
        self.form_open = False
        self.composer: Composer | None = None

        self.roster.bind(
            on_delete=self.remove,
            on_toggle=self.toggle if self.features.toggle_enabled else None,
        )

    @property
    def phase(self) -> BoardPhase:
        if self.loading:
            return BoardPhase.LOADING
        if self.form_open:
            return BoardPhase.FORM_OPEN
        return BoardPhase.READY

    async def load(self) -> bool:
        token = operation_ctx.set("load")
        try:
            try:
                messages = await self.store.list_messages()
            except StoreError as exc:
                self._fail("load", FETCH_FAILED, exc)
                return False
            self.messages = tuple(messages)
            self.error = None
            record_operation("load", "success")
            return True
        finally:
            self.loading = False
            operation_ctx.reset(token)

    async def create(self, request: CreateMessageRequest) -> bool:
        token = operation_ctx.set("create")
        try:
            try:
                await self.store.create_message(request)
            except StoreError as exc:
                self._fail("create", CREATE_FAILED, exc)
                return False
            record_operation("create", "success")
            self.close_form()
        finally:
            operation_ctx.reset(token)
        await self._reload()
        return True

    async def remove(self, message_id: str) -> bool:
        token = operation_ctx.set("remove")
        try:
            try:
                await self.store.delete_message(message_id)
            except StoreError as exc:
                self._fail("remove", DELETE_FAILED, exc, message_id=message_id)
                return False
            record_operation("remove", "success")
        finally:
            operation_ctx.reset(token)
        await self._reload()
        return True

    async def toggle(self, message_id: str) -> bool:
        if not self.features.toggle_enabled:
            raise FeatureDisabledError("Toggling messages is not enabled on this board")
        token = operation_ctx.set("toggle")
        try:
            try:
                await self.store.toggle_message(message_id)
            except StoreError as exc:
                self._fail("toggle", TOGGLE_FAILED, exc, message_id=message_id)
                return False
            record_operation("toggle", "success")
        finally:
            operation_ctx.reset(token)
        await self._reload()
        return True

    def open_form(self) -> Composer:
        if self.composer is None:
            self.composer = Composer(
                on_submit=self.create, on_cancel=self.close_form, prompter=self.prompter
            )
        self.form_open = True
        return self.composer

    def close_form(self) -> None:
        self.form_open = False
        self.composer = None

    def toggle_form(self) -> None:
        if self.form_open:
            self.close_form()
        else:
            self.open_form()

    def dismiss_error(self) -> None:
        self.error = None

    def render(self) -> str:
        if self.loading:
            return LOADING_TEXT
        sections = [f"{BOARD_TITLE}\n{BOARD_SUBTITLE}"]
        if self.error:
            sections.append(f"⚠️ {self.error}")
        if self.form_open and self.composer is not None:
            sections.append(self.composer.render())
        sections.append(self.roster.render(self.messages))
        return "\n\n".join(sections)

    async def _reload(self) -> None:
        await self.load()

    def _fail(self, operation: str, banner: str, exc: StoreError, **extra: object) -> None:
        self.error = banner
        record_operation(operation, "failure")
        logger.warning(banner, extra={"error": str(exc), **extra})
