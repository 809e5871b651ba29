from __future__ import annotations

import pytest
from fastapi import FastAPI

from noticeboard.board.capabilities import AutoConfirmer
from noticeboard.core.config import Settings
from noticeboard.main import build_parser, run_command
from noticeboard.services.store import HttpMessageStore
from tests.fakes import RecordingPrompter


async def run(argv: list[str], store: HttpMessageStore, **settings: object) -> int:
    args = build_parser().parse_args(argv)
    return await run_command(
        args,
        store,
        Settings(**settings),
        confirmer=AutoConfirmer(),
        prompter=RecordingPrompter(),
    )


async def test_list_empty_board(
    http_store: HttpMessageStore, capsys: pytest.CaptureFixture[str]
) -> None:
    assert await run(["list"], http_store) == 0
    out = capsys.readouterr().out
    assert "🏠 家庭留言板" in out
    assert "暂无留言..." in out


async def test_post_then_delete(
    fake_api: FastAPI, http_store: HttpMessageStore, capsys: pytest.CaptureFixture[str]
) -> None:
    code = await run(
        ["post", "--title", "Hi", "--content", "there", "--author", "Bob", "--priority", "urgent"],
        http_store,
    )
    assert code == 0
    assert "🔴 紧急" in capsys.readouterr().out

    assert await run(["delete", "1", "--yes"], http_store) == 0
    assert "暂无留言..." in capsys.readouterr().out
    assert fake_api.state.messages == {}


async def test_post_with_blank_field_fails_without_request(
    fake_api: FastAPI, http_store: HttpMessageStore
) -> None:
    code = await run(["post", "--title", " ", "--content", "x", "--author", "y"], http_store)
    assert code == 1
    assert "POST /api/messages" not in fake_api.state.requests


async def test_server_error_returns_non_zero(
    fake_api: FastAPI, http_store: HttpMessageStore, capsys: pytest.CaptureFixture[str]
) -> None:
    fake_api.state.failures["GET /api/messages"] = 500
    assert await run(["list"], http_store) == 1
    assert "Failed to fetch messages" in capsys.readouterr().out


async def test_toggle_disabled_variant(http_store: HttpMessageStore) -> None:
    assert await run(["toggle", "1"], http_store, BOARD_TOGGLE_ENABLED=False) == 2


def test_parser_rejects_unknown_priority() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(
            ["post", "--title", "t", "--content", "c", "--author", "a", "--priority", "critical"]
        )
