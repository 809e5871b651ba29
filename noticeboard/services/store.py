from __future__ import annotations

import time
import uuid
from typing import Any, Protocol
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PayloadValidationError

from noticeboard.api.schemas import CreateMessageRequest, ErrorResponse, Message
from noticeboard.core.config import Settings, get_settings
from noticeboard.core.logging import log_error, log_info, request_id_ctx
from noticeboard.observability.metrics import record_request
from noticeboard.services.errors import (
    MalformedPayloadError,
    StoreResponseError,
    StoreTransportError,
)

COLLECTION_PATH = "/api/messages"

_messages_adapter = TypeAdapter(list[Message])


class MessageStore(Protocol):
    """Remote store the board controller talks to."""

    async def list_messages(self) -> list[Message]: ...

    async def create_message(self, request: CreateMessageRequest) -> None: ...

    async def delete_message(self, message_id: str) -> None: ...

    async def toggle_message(self, message_id: str) -> None: ...


class HttpMessageStore:
    """``MessageStore`` backed by the ``/api/messages`` REST resource.

    Every call is a single round trip. Non-2xx responses raise
    ``StoreResponseError`` and transport failures raise
    ``StoreTransportError``; nothing is retried.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or _build_client(self._settings)

    async def __aenter__(self) -> HttpMessageStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_messages(self) -> list[Message]:
        response = await self._send("GET", COLLECTION_PATH, COLLECTION_PATH)
        try:
            return _messages_adapter.validate_python(response.json())
        except (ValueError, PayloadValidationError) as exc:
            raise MalformedPayloadError("Message collection payload is invalid") from exc

    async def create_message(self, request: CreateMessageRequest) -> None:
        await self._send("POST", COLLECTION_PATH, COLLECTION_PATH, json=request.to_payload())

    async def delete_message(self, message_id: str) -> None:
        await self._send(
            "DELETE",
            f"{COLLECTION_PATH}/{quote(message_id, safe='')}",
            f"{COLLECTION_PATH}/{{id}}",
        )

    async def toggle_message(self, message_id: str) -> None:
        await self._send(
            "POST",
            f"{COLLECTION_PATH}/{quote(message_id, safe='')}/toggle",
            f"{COLLECTION_PATH}/{{id}}/toggle",
        )

    async def _send(
        self, method: str, url: str, path_template: str, **kwargs: Any
    ) -> httpx.Response:
        req_id = str(uuid.uuid4())
        token = request_id_ctx.set(req_id)
        headers = {"X-Request-Id": req_id}
        if self._settings.api_key:
            headers["X-API-Key"] = self._settings.api_key
        start = time.perf_counter()
        try:
            try:
                response = await self._client.request(method, url, headers=headers, **kwargs)
            except httpx.HTTPError as exc:
                duration_ms = (time.perf_counter() - start) * 1000.0
                # Path template keeps metric labels free of message ids.
                record_request(method, path_template, None, duration_ms)
                log_error(
                    "request failed",
                    path=url,
                    method=method,
                    latency_ms=round(duration_ms, 2),
                    error=str(exc) or type(exc).__name__,
                )
                raise StoreTransportError(f"{method} {url} failed: {exc}") from exc

            duration_ms = (time.perf_counter() - start) * 1000.0
            record_request(method, path_template, response.status_code, duration_ms)
            log_info(
                "request",
                path=url,
                method=method,
                status_code=response.status_code,
                latency_ms=round(duration_ms, 2),
            )
            if not response.is_success:
                raise StoreResponseError(
                    f"{method} {url} returned {response.status_code}{_describe_error(response)}",
                    response.status_code,
                )
            return response
        finally:
            request_id_ctx.reset(token)


def _build_client(settings: Settings) -> httpx.AsyncClient:
    if settings.request_timeout is None:
        return httpx.AsyncClient(base_url=settings.api_url)
    return httpx.AsyncClient(base_url=settings.api_url, timeout=settings.request_timeout)


def _describe_error(response: httpx.Response) -> str:
    try:
        payload = ErrorResponse.model_validate(response.json())
    except (ValueError, PayloadValidationError):
        return ""
    if payload.message:
        return f": {payload.message}"
    return ""
