from __future__ import annotations

from typing import AsyncIterator

import httpx
import pytest
from fastapi import FastAPI

from noticeboard.core.config import Settings
from noticeboard.services.store import HttpMessageStore
from tests.fakes import RecordingPrompter, RecordingStore, build_fake_api


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def prompter() -> RecordingPrompter:
    return RecordingPrompter()


@pytest.fixture
def fake_api() -> FastAPI:
    return build_fake_api()


@pytest.fixture
async def http_store(fake_api: FastAPI) -> AsyncIterator[HttpMessageStore]:
    transport = httpx.ASGITransport(app=fake_api)
    async with httpx.AsyncClient(transport=transport, base_url="http://board.test") as client:
        yield HttpMessageStore(client=client, settings=Settings())
