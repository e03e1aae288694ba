"""Chat completion client."""
from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.dto import ChatCompletion, ChatMessage, ModelList
from ..base.errors import MalformedResponseError
from ..base.facade import AiClientBase
from ..base.pipeline import INVALID_RESPONSE_MESSAGE
from ..config.defaults import MODELS_SEGMENT


class ChatClient(AiClientBase):
    """Send chat completions through the connection's pipeline.

    Example::

        client = ChatClient(create_connection("Ollama"))
        reply = await client.complete("Hello", system_prompt="Be brief.")
        if reply is None:
            print(client.error_message)
    """

    @property
    def chat_history(self) -> List[ChatMessage]:
        return self.pipeline.chat_history.messages

    @property
    def last_chat_response(self) -> Optional[ChatCompletion]:
        return self.pipeline.last_chat_response

    def clear_history(self) -> None:
        self.pipeline.chat_history.clear()

    async def complete(
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
        """Return the assistant reply to ``prompt`` or ``None`` on failure."""
        self.set_error()
        result = await self.pipeline.get_chat_response(
            prompt,
            system_prompt,
            include_history,
            temperature=temperature,
            top_p=top_p,
            timeout_seconds=timeout_seconds,
            cancel_token=cancel_token,
        )
        if result is None:
            self._record_pipeline_failure()
        return result

    async def complete_messages(
        self,
        messages: Sequence[ChatMessage],
        include_history: bool = False,
        *,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Send a prepared message list, e.g. with image content items."""
        self.set_error()
        result = await self.pipeline.get_chat_response_for_messages(
            messages,
            include_history,
            temperature=temperature,
            top_p=top_p,
            timeout_seconds=timeout_seconds,
            cancel_token=cancel_token,
        )
        if result is None:
            self._record_pipeline_failure()
        return result

    async def list_models(
        self,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[List[str]]:
        """Return the model ids served by the endpoint, ``None`` on failure.

        Doubles as an API key check: a bad key surfaces as an auth error.
        """
        self.set_error()
        body = await self.pipeline.send_get_request(
            MODELS_SEGMENT, timeout_seconds=timeout_seconds, cancel_token=cancel_token
        )
        if body is None:
            self._record_pipeline_failure()
            return None
        try:
            return ModelList.model_validate_json(body).ids
        except ValidationError as exc:
            error = MalformedResponseError(
                message=INVALID_RESPONSE_MESSAGE,
                provider=self.connection.provider_mode.value,
                model=self.connection.model_id or None,
                raw=exc,
            )
            self.set_error(error.message, error)
            return None


__all__ = ["ChatClient"]
