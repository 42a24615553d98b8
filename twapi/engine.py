"""
Teamwork API engine.

Executes entities against the configured Teamwork.com site with a shared
``httpx.AsyncClient``. The engine adds the bearer token, classifies failures
into ``twapi.errors`` types and runs post-hooks (id callback) after a
successful decode.
"""
import asyncio
import logging
from typing import Any, Callable, Optional, Tuple

import httpx

from .entity import Entity, load_json
from .errors import (
    DecodeError,
    NotFoundError,
    RequestCancelledError,
    TransportError,
    UpstreamError,
)

logger = logging.getLogger("teamwork-mcp.engine")

MAX_BODY_SIZE = 8 << 20  # 8 MiB
MAX_ERROR_TEXT = 512


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class Option:
    """Per-call option. ``apply`` runs only after a successful decode."""

    def wrap_logger(self, log: logging.Logger) -> logging.Logger:
        return log

    def apply(self, raw: Any) -> None:
        pass


class IDCallback(Option):
    def __init__(self, field: str, callback: Callable[[int], None]):
        self.field = field
        self.callback = callback

    def apply(self, raw: Any) -> None:
        found = find_id(raw, self.field)
        if found is not None:
            self.callback(found)


class RequestLogger(Option):
    def __init__(self, log: logging.Logger):
        self.log = log

    def wrap_logger(self, log: logging.Logger) -> logging.Logger:
        return self.log


def with_id_callback(field: str, callback: Callable[[int], None]) -> IDCallback:
    """Report the server-assigned id of a created resource.

    Looks for ``field`` (case-insensitive) at the top level of the response,
    then inside the first object value. Does nothing when it is absent.
    """
    return IDCallback(field or "id", callback)


def with_logger(log: logging.Logger) -> RequestLogger:
    return RequestLogger(log)


def _as_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value)
    else:
        return None
    return number if number > 0 else None


def _match(obj: dict, key: str) -> Optional[int]:
    for name, value in obj.items():
        if name.lower() == key:
            found = _as_id(value)
            if found is not None:
                return found
    return None


def find_id(raw: Any, field: str) -> Optional[int]:
    if not isinstance(raw, dict):
        return None
    key = field.lower()
    found = _match(raw, key)
    if found is not None:
        return found
    for value in raw.values():
        if isinstance(value, dict):
            return _match(value, key)
    return None


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def _error_messages(body: bytes) -> list:
    """Extract messages from ``{"errors": [...]}`` or ``{"message": ...}``."""
    try:
        data = load_json(body)
    except DecodeError:
        data = None
    messages = []
    if isinstance(data, dict):
        errors = data.get("errors")
        if isinstance(errors, list):
            for item in errors:
                if isinstance(item, dict):
                    text = item.get("message") or item.get("detail") or item.get("title")
                    if text:
                        messages.append(str(text))
                elif isinstance(item, str):
                    messages.append(item)
        if not messages and isinstance(data.get("message"), str):
            messages.append(data["message"])
        if not messages and isinstance(data.get("MESSAGE"), str):
            messages.append(data["MESSAGE"])
    if not messages:
        text = body.decode("utf-8", errors="replace").strip()
        if text:
            messages.append(text[:MAX_ERROR_TEXT])
    return messages


class Engine:
    """Executes entities against a Teamwork.com site.

    Safe for concurrent ``do`` calls: the client and token are read-only
    after construction, and every call owns its request and buffers.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        client: Optional[httpx.AsyncClient] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._owns_client = client is None
        # No default timeout; callers pass one to do().
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(None))
        self.logger = log or logger

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "Engine":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def do(
        self,
        entity: Entity,
        *options: Option,
        cancel: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> Entity:
        """Execute ``entity`` and return it with its response decoded.

        Setting ``cancel`` or exceeding ``timeout`` aborts the in-flight call
        with ``RequestCancelledError``; post-hooks then do not run.
        """
        log = self.logger
        for option in options:
            log = option.wrap_logger(log)

        request = entity.build_request(self.base_url)
        request.headers["Authorization"] = f"Bearer {self._token}"

        body = await self._guard(self._execute(entity, request, log), cancel, timeout)

        if options:
            raw = load_json(body) if body else None
            for option in options:
                option.apply(raw)
        return entity

    async def _execute(self, entity: Entity, request: httpx.Request, log: logging.Logger) -> bytes:
        log.debug("%s %s", request.method, request.url)
        response, body, truncated = await self._send(request)
        log.debug("%s %s -> %d", request.method, request.url, response.status_code)

        if response.status_code >= 400:
            messages = _error_messages(body)
            log.warning(
                "Teamwork API %s %s failed with %d: %s",
                request.method, request.url.path, response.status_code, "; ".join(messages),
            )
            if response.status_code == 404:
                raise NotFoundError(response.status_code, messages)
            raise UpstreamError(response.status_code, messages)

        if truncated:
            raise DecodeError(f"response body exceeds {MAX_BODY_SIZE} bytes")

        if not body or "json" not in response.headers.get("content-type", ""):
            return b""
        entity.decode_response(body)
        if request.method == "GET":
            entity.populate_web_link(self.base_url)
        return body

    async def _send(self, request: httpx.Request) -> Tuple[httpx.Response, bytes, bool]:
        try:
            response = await self._client.send(request, stream=True)
        except httpx.RequestError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        try:
            chunks = []
            size = 0
            async for chunk in response.aiter_bytes():
                size += len(chunk)
                if size > MAX_BODY_SIZE:
                    return response, b"".join(chunks), True
                chunks.append(chunk)
            return response, b"".join(chunks), False
        except httpx.RequestError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        finally:
            await response.aclose()

    async def _guard(self, coro, cancel: Optional[asyncio.Event], timeout: Optional[float]) -> bytes:
        if cancel is None and timeout is None:
            return await coro
        if cancel is not None and cancel.is_set():
            coro.close()
            raise RequestCancelledError("request cancelled")

        task = asyncio.ensure_future(coro)
        waiters = {task}
        cancelled = None
        if cancel is not None:
            cancelled = asyncio.ensure_future(cancel.wait())
            waiters.add(cancelled)
        try:
            done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if cancelled is not None:
                cancelled.cancel()
            if not task.done():
                task.cancel()

        if task in done:
            return task.result()
        await asyncio.wait({task})
        if cancel is not None and cancel.is_set():
            raise RequestCancelledError("request cancelled")
        raise RequestCancelledError(f"deadline of {timeout}s exceeded")
