#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime
from typing import Sequence
from zoneinfo import ZoneInfo

from noticeboard.api.schemas import Priority
from noticeboard.board.capabilities import (
    AutoConfirmer,
    Confirmer,
    ConsoleConfirmer,
    ConsolePrompter,
    Prompter,
)
from noticeboard.board.controller import BoardController, BoardFeatures
from noticeboard.board.roster import Roster
from noticeboard.core.config import Settings, get_settings
from noticeboard.core.logging import setup_logging
from noticeboard.observability.metrics import metrics_response
from noticeboard.services.store import HttpMessageStore, MessageStore


def build_board(
    store: MessageStore,
    settings: Settings,
    confirmer: Confirmer,
    prompter: Prompter,
) -> BoardController:
    features = BoardFeatures(toggle_enabled=settings.toggle_enabled)
    roster = Roster(
        confirmer,
        tz=ZoneInfo(settings.timezone),
        show_toggle=features.toggle_enabled,
    )
    return BoardController(store, roster, prompter, features)


async def run_command(
    args: argparse.Namespace,
    store: MessageStore,
    settings: Settings,
    confirmer: Confirmer | None = None,
    prompter: Prompter | None = None,
) -> int:
    if confirmer is None:
        confirmer = AutoConfirmer() if getattr(args, "yes", False) else ConsoleConfirmer()
    board = build_board(store, settings, confirmer, prompter or ConsolePrompter())
    await board.load()

    if args.cmd == "post":
        composer = board.open_form()
        composer.set_field("title", args.title)
        composer.set_field("content", args.content)
        composer.set_field("author", args.author)
        composer.set_field("priority", args.priority)
        if args.expires_at:
            composer.set_field("expires_at", args.expires_at)
        if not await composer.submit():
            print(board.render())
            return 1
    elif args.cmd == "delete":
        await board.roster.request_delete(args.id)
    elif args.cmd == "toggle":
        if not settings.toggle_enabled:
            print("toggle is disabled on this board (BOARD_TOGGLE_ENABLED=false)", file=sys.stderr)
            return 2
        await board.roster.request_toggle(args.id)

    print(board.render())
    return 1 if board.error else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Family notice board client")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="Show the current board")

    sp_post = sub.add_parser("post", help="Post a new message")
    sp_post.add_argument("--title", required=True)
    sp_post.add_argument("--content", required=True)
    sp_post.add_argument("--author", required=True)
    sp_post.add_argument(
        "--priority",
        default=Priority.NORMAL.value,
        choices=[priority.value for priority in Priority],
    )
    sp_post.add_argument("--expires-at", type=datetime.fromisoformat, help="ISO 8601 timestamp")

    sp_delete = sub.add_parser("delete", help="Delete a message by id")
    sp_delete.add_argument("id")
    sp_delete.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")

    sp_toggle = sub.add_parser("toggle", help="Enable or disable a message by id")
    sp_toggle.add_argument("id")

    sub.add_parser("stats", help="Print client metrics after loading the board")
    return p


async def _main(args: argparse.Namespace, settings: Settings) -> int:
    async with HttpMessageStore(settings=settings) as store:
        code = await run_command(args, store, settings)
    if args.cmd == "stats":
        payload, _ = metrics_response()
        print(payload.decode("utf-8"))
    return code


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, stream=sys.stderr)
    return asyncio.run(_main(args, settings))


if __name__ == "__main__":
    raise SystemExit(main())
