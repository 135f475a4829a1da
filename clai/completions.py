"""HTTP client for the OpenAI chat completions API."""

from __future__ import annotations

import sys
import textwrap
from typing import Optional, Protocol, Sequence, TextIO

import httpx

from .config import ClaiConfig
from .messages import Message


class CompletionError(RuntimeError):
    """Raised when the completion request fails."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChatCompleter(Protocol):
    def complete_chat(self, messages: Sequence[Message]) -> str:
        ...


class OpenAIClient:
    """Single-shot wrapper around the chat completions endpoint.

    Exactly one request is made per call; failures are reported, never
    retried.
    """

    def __init__(
        self,
        config: ClaiConfig,
        *,
        client: Optional[httpx.Client] = None,
        debug: bool = False,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=config.timeout)
        self._debug = debug
        self._stderr = stderr

    def __enter__(self) -> "OpenAIClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def complete_chat(self, messages: Sequence[Message]) -> str:
        """POST ``messages`` and return the raw response body."""

        payload = {
            "model": self._config.model,
            "messages": [message.to_dict() for message in messages],
        }
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }

        if self._debug and messages:
            preview = textwrap.shorten(messages[-1].content.replace("\n", " "), width=120, placeholder="...")
            print(
                f"[debug] OpenAI request model={self._config.model} messages={len(messages)} preview='{preview}'",
                file=self.stderr,
            )

        try:
            response = self._client.post(self._config.endpoint, json=payload, headers=headers)
        except httpx.RequestError as exc:
            raise CompletionError(f"Failed to connect to {self._config.endpoint}: {exc}") from exc

        if self._debug:
            print(
                f"[debug] OpenAI response status={response.status_code} "
                f"request_id={response.headers.get('x-request-id', 'n/a')}",
                file=self.stderr,
            )

        body = response.text
        if not response.is_success:
            print(body, file=self.stderr)
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise CompletionError(
                    f"OpenAI API returned HTTP {response.status_code}",
                    status_code=response.status_code,
                ) from exc
        return body


__all__ = ["ChatCompleter", "CompletionError", "OpenAIClient"]
