"""RequestPipeline: provider-correct HTTP requests for one connection.

Purpose:
- Turn a connection plus a payload into a provider-correct HTTP request
  (URL from the endpoint template, Bearer or ``api-key`` auth, JSON or
  multipart body), send it asynchronously and classify failures.
- Own the chat history of one conversation and the optional diagnostics
  capture of the last request/response.

External dependencies:
- ``httpx`` through :func:`compat_providers.base.http.create_async_client`;
  one client per call so auth headers always reflect the current key.
- ``pydantic`` DTOs for chat request/response bodies.

Failure semantics:
- Internal helpers raise :class:`ProviderError` subclasses. Public methods
  catch them, record ``error_message``/``last_error`` and return ``None``.
- Classification order: transport exception, 401, 404, other non-2xx with a
  provider error body, other non-2xx; then malformed success payloads.

Timeout strategy:
- Package defaults from ``get_timeout_config()``; ``timeout_seconds`` on the
  pipeline or per call overrides the request timeout. A ``CancellationToken``
  abandons an in-flight request cooperatively.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from contextlib import suppress
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Sequence, Tuple

import httpx
from pydantic import BaseModel, ValidationError

from ...config.defaults import CHAT_COMPLETIONS_SEGMENT
from ..cancellation import CancellationToken, CancelledError
from ..dto.chat import ChatCompletion, ChatMessage, ChatRequest
from ..errors import (
    AuthenticationError,
    ConfigurationError,
    EndpointNotFoundError,
    ErrorCode,
    MalformedResponseError,
    ProviderError,
    TransportError,
    classify_status,
    parse_error_body,
)
from ..http import create_async_client
from ..logging import LogContext, get_logger, log_event
from .chat_history import ChatHistory
from .request_capture import RequestCapture

if TYPE_CHECKING:  # pragma: no cover
    from ...connections.connection import Connection

_logger = get_logger("compat.pipeline")

INVALID_RESPONSE_MESSAGE = "Invalid response from AI service."
AUTH_FAILED_MESSAGE = "Authentication failed. Invalid API Key or request not supported."


def _with_detail(message: str, detail: Optional[str]) -> str:
    return f"{message}\n{detail}" if detail else message


class RequestPipeline:
    """Send requests for one connection and keep per-conversation state.

    Attributes:
        connection: The connection requests are resolved against.
        chat_history: Messages accepted so far plus every assistant reply.
        last_chat_response: Last successfully parsed chat completion.
        error_message: Message of the last failure; reset at each call.
        last_error: Structured form of the last failure.
    """

    def __init__(
        self,
        connection: "Connection",
        *,
        capture_request_data: bool = False,
        proxy: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if connection is None:
            raise ConfigurationError(message="No active connection available.")
        self.connection = connection
        self.proxy = proxy
        self.timeout_seconds = timeout_seconds
        self.transport = transport
        self.chat_history = ChatHistory()
        self.capture = RequestCapture(enabled=capture_request_data)
        self.last_chat_response: Optional[ChatCompletion] = None
        self.error_message = ""
        self.last_error: Optional[ProviderError] = None
        self._request_id: Optional[str] = None

    # ----- diagnostics -----

    @property
    def capture_request_data(self) -> bool:
        return self.capture.enabled

    @capture_request_data.setter
    def capture_request_data(self, value: bool) -> None:
        self.capture.enabled = bool(value)

    @property
    def last_request_json(self) -> Optional[str]:
        return self.capture.last_request_json

    @property
    def last_response_json(self) -> Optional[str]:
        return self.capture.last_response_json

    @property
    def is_error(self) -> bool:
        return bool(self.error_message)

    def reset_error(self) -> None:
        self.error_message = ""
        self.last_error = None

    def set_error(self, error: ProviderError) -> None:
        """Record ``error`` as the outcome of the current call."""
        self.last_error = error
        self.error_message = error.message
        log_event(
            _logger,
            "pipeline.error",
            self._context(),
            level=logging.WARNING,
            code=error.code.value,
            status=error.status_code,
            url=error.url,
            error=error.message,
        )

    def _context(self) -> LogContext:
        conn = self.connection
        return LogContext(
            provider=conn.provider_mode.value,
            model=conn.model_id or None,
            connection=conn.name or None,
            request_id=self._request_id,
        )

    # ----- request building -----

    def get_endpoint_url(self, operation_segment: str) -> str:
        return self.connection.resolve_endpoint_url(operation_segment)

    def build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        headers.update(self.connection.build_auth_header())
        return headers

    def build_chat_request(
        self,
        messages: Sequence[ChatMessage],
        include_history: bool = False,
        *,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
    ) -> ChatRequest:
        """Assemble the request batch and extend the history.

        The batch is the history (when ``include_history``) followed by each
        incoming message not already present in the batch. Accepted messages
        are appended to the history immediately.

        Raises:
            ConfigurationError: ``messages`` is empty.
        """
        if not messages:
            raise ConfigurationError(message="No messages provided for chat request.")
        batch = list(self.chat_history) if include_history else []
        for message in messages:
            if any(message.is_duplicate_of(existing) for existing in batch):
                continue
            batch.append(message)
            self.chat_history.append(message)
        return ChatRequest(
            model=self.connection.model_id or None,
            messages=batch,
            temperature=temperature,
            top_p=top_p,
        )

    @staticmethod
    def serialize_payload(payload: Any) -> str:
        """Return the JSON text for a dict, a pydantic model or raw JSON text."""
        if isinstance(payload, str):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json", exclude_none=True)
        return json.dumps(payload, ensure_ascii=False)

    # ----- chat -----

    async def get_chat_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        include_history: bool = False,
        *,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Send ``prompt`` (after an optional system prompt) and return the reply text."""
        messages = []
        if system_prompt:
            messages.append(ChatMessage.system(system_prompt))
        messages.append(ChatMessage.user(prompt))
        return await self.get_chat_response_for_messages(
            messages,
            include_history,
            temperature=temperature,
            top_p=top_p,
            timeout_seconds=timeout_seconds,
            cancel_token=cancel_token,
        )

    async def get_chat_response_for_messages(
        self,
        messages: Sequence[ChatMessage],
        include_history: bool = False,
        *,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Send a message batch and return the assistant reply text.

        Returns ``None`` on failure; see ``error_message``/``last_error``.
        """
        self.reset_error()
        try:
            request = self.build_chat_request(
                messages, include_history, temperature=temperature, top_p=top_p
            )
            response = await self._send(
                CHAT_COMPLETIONS_SEGMENT,
                json_body=self.serialize_payload(request.to_payload()),
                timeout_seconds=timeout_seconds,
                cancel_token=cancel_token,
            )
            self.capture.record_response(response.text)
            completion, reply = self._parse_chat_completion(response.text)
        except ProviderError as exc:
            self.set_error(exc)
            return None

        self.last_chat_response = completion
        self.chat_history.append(reply)
        return reply.text

    def _parse_chat_completion(self, text: str) -> Tuple[ChatCompletion, ChatMessage]:
        try:
            completion = ChatCompletion.model_validate_json(text)
            message = completion.first_message
            if message is None:
                raise self._malformed(None)
            reply = message.to_chat_message()
        except ValidationError as exc:
            raise self._malformed(exc) from exc
        return completion, reply

    def _malformed(self, raw: Optional[BaseException]) -> MalformedResponseError:
        return MalformedResponseError(
            message=INVALID_RESPONSE_MESSAGE,
            provider=self.connection.provider_mode.value,
            model=self.connection.model_id or None,
            raw=raw,
        )

    # ----- non-chat operations -----

    async def send_json_request_to_response(
        self,
        payload: Any,
        operation_segment: str,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[httpx.Response]:
        """POST a JSON payload and return the raw response (e.g. audio bytes)."""
        self.reset_error()
        try:
            return await self._send(
                operation_segment,
                json_body=self.serialize_payload(payload),
                timeout_seconds=timeout_seconds,
                cancel_token=cancel_token,
            )
        except ProviderError as exc:
            self.set_error(exc)
            return None

    async def send_json_request(
        self,
        payload: Any,
        operation_segment: str,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """POST a JSON payload and return the response body text."""
        response = await self.send_json_request_to_response(
            payload, operation_segment, timeout_seconds=timeout_seconds, cancel_token=cancel_token
        )
        if response is None:
            return None
        self.capture.record_response(response.text)
        return response.text

    async def send_multipart_request(
        self,
        operation_segment: str,
        files: Mapping[str, Any],
        data: Optional[Mapping[str, Any]] = None,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """POST a multipart form (file uploads plus fields) and return the body text."""
        self.reset_error()
        try:
            response = await self._send(
                operation_segment,
                files=dict(files),
                data={k: str(v) for k, v in (data or {}).items() if v is not None},
                timeout_seconds=timeout_seconds,
                cancel_token=cancel_token,
            )
        except ProviderError as exc:
            self.set_error(exc)
            return None
        self.capture.record_response(response.text)
        return response.text

    async def send_get_request(
        self,
        operation_segment: str,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """GET an operation segment (e.g. ``models``) and return the body text."""
        self.reset_error()
        try:
            response = await self._send(
                operation_segment,
                method="GET",
                timeout_seconds=timeout_seconds,
                cancel_token=cancel_token,
            )
        except ProviderError as exc:
            self.set_error(exc)
            return None
        self.capture.record_response(response.text)
        return response.text

    # ----- transport -----

    async def _send(
        self,
        operation_segment: str,
        *,
        method: str = "POST",
        json_body: Optional[str] = None,
        files: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> httpx.Response:
        conn = self.connection
        url = conn.resolve_endpoint_url(operation_segment)
        headers = self.build_headers()
        if json_body is not None:
            headers["Content-Type"] = "application/json"

        self._request_id = uuid.uuid4().hex[:12]
        ctx = self._context()
        self.capture.record_request(json_body, url, conn.model_id, conn.api_key)
        log_event(_logger, "pipeline.request", ctx, method=method, url=url, segment=operation_segment)

        timeout = timeout_seconds if timeout_seconds is not None else self.timeout_seconds
        started = time.perf_counter()
        try:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            async with create_async_client(
                headers=headers, proxy=self.proxy, timeout_seconds=timeout, transport=self.transport
            ) as client:
                response = await self._await_cancellable(
                    client.request(method, url, content=json_body, data=data, files=files),
                    cancel_token,
                )
        except CancelledError as exc:
            raise TransportError(
                message=f"Http request failed: {exc}",
                code=ErrorCode.CANCELLED,
                provider=ctx.provider,
                model=ctx.model,
                url=url,
                raw=exc,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(
                message=f"Http request failed: {exc}",
                provider=ctx.provider,
                model=ctx.model,
                url=url,
                raw=exc,
            ) from exc

        log_event(
            _logger,
            "pipeline.response",
            ctx,
            status=response.status_code,
            elapsed_ms=int((time.perf_counter() - started) * 1000),
        )
        if response.is_success:
            return response
        raise self._classify_failure(response, url, ctx)

    @staticmethod
    async def _await_cancellable(awaitable: Any, token: Optional[CancellationToken]) -> httpx.Response:
        """Await ``awaitable`` unless ``token`` fires first."""
        if token is None:
            return await awaitable
        request_task = asyncio.ensure_future(awaitable)
        cancel_task = asyncio.ensure_future(token.wait())
        try:
            done, _ = await asyncio.wait({request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        except BaseException:
            request_task.cancel()
            cancel_task.cancel()
            raise
        cancel_task.cancel()
        if request_task in done:
            return request_task.result()
        request_task.cancel()
        with suppress(asyncio.CancelledError):
            await request_task
        raise CancelledError(token.reason or "operation cancelled")

    def _classify_failure(self, response: httpx.Response, url: str, ctx: LogContext) -> ProviderError:
        body = response.text if response.content else ""
        if body:
            self.capture.record_response(body)
        detail = parse_error_body(body)
        common = dict(
            provider=ctx.provider,
            model=ctx.model,
            status_code=response.status_code,
            url=url,
        )
        code = classify_status(response.status_code)
        if code is ErrorCode.AUTH:
            return AuthenticationError(message=_with_detail(AUTH_FAILED_MESSAGE, detail), **common)
        if code is ErrorCode.NOT_FOUND:
            return EndpointNotFoundError(
                message=_with_detail(f"AI request failed - invalid Url: {url}", detail), **common
            )
        return ProviderError(message=f"AI request failed: {detail or response.status_code}", **common)


__all__ = ["RequestPipeline", "INVALID_RESPONSE_MESSAGE", "AUTH_FAILED_MESSAGE"]
