"""OpenRouter API integration for generating New Year greetings.

Streams chat completions over server-sent events and reports the growing
greeting text after every delta. Generation failures never reach the caller:
they are logged and replaced with a fixed fallback greeting.
"""

import codecs
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from ..config import OpenRouterConfig
from ..models import UserInfo
from .http import GenerationError, HTTPClient
from .prompts import build_greeting_prompt, fallback_greeting

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[str], Awaitable[None]]

SSE_DATA_PREFIX = "data: "
SSE_DONE = "data: [DONE]"


class SSEDeltaParser:
    """Incremental parser for OpenRouter's streamed chat-completion events.

    Feed it decoded text as it arrives; it returns the content deltas of every
    complete ``data:`` line and keeps partial lines buffered. Comments, the
    ``[DONE]`` sentinel and payloads that are not JSON are skipped.
    """

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, text: str) -> list[str]:
        """Consume a piece of the event stream.

        Args:
            text: Decoded stream data, possibly ending mid-line.

        Returns:
            Content deltas found in the complete lines, in order.
        """
        self._buffer += text
        *lines, self._buffer = self._buffer.split("\n")

        deltas = []
        for line in lines:
            delta = self._parse_line(line.strip())
            if delta:
                deltas.append(delta)
        return deltas

    @staticmethod
    def _parse_line(line: str) -> str | None:
        if not line or line == SSE_DONE or line.startswith(":"):
            return None
        if not line.startswith(SSE_DATA_PREFIX):
            return None

        try:
            payload = json.loads(line[len(SSE_DATA_PREFIX):])
        except json.JSONDecodeError:
            return None

        try:
            return payload["choices"][0]["delta"].get("content")
        except (KeyError, IndexError, TypeError, AttributeError):
            return None


class OpenRouterClient(HTTPClient):
    """Greeting text generator backed by OpenRouter chat completions."""

    def __init__(
        self,
        settings: OpenRouterConfig,
        timeout: float = 60,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize client.

        Args:
            settings: OpenRouter endpoint, key and model parameters.
            timeout: Total timeout of one request in seconds.
            session: Optional shared HTTP session.
        """
        super().__init__(timeout, session)
        self.settings = settings

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_key}",
            "HTTP-Referer": self.settings.referer,
            "X-Title": self.settings.title,
        }

    def _payload(self, user: UserInfo, stream: bool) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.settings.text_model,
            "messages": [{"role": "user", "content": build_greeting_prompt(user)}],
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }
        if stream:
            payload["stream"] = True
        return payload

    async def generate_greeting_stream(self, user: UserInfo, on_chunk: ChunkCallback) -> str:
        """Generate a greeting, reporting the text so far after every delta.

        ``on_chunk`` is awaited for each delta with the full accumulated text,
        so the caller sees chunks strictly one at a time.

        Args:
            user: User the greeting is written for.
            on_chunk: Awaitable callback receiving the full text so far.

        Returns:
            Final greeting text, or the fallback greeting if generation failed.
        """
        try:
            async with self._open_session() as session:
                async with session.post(
                    self.settings.api_url, json=self._payload(user, stream=True), headers=self._headers()
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise GenerationError(
                            f"OpenRouter API error: {response.status} - {error_text}"
                        )
                    text = await self._read_stream(response, on_chunk)
        except Exception as e:
            logger.error(f"Error generating greeting: {e}")
            return fallback_greeting(user.first_name)

        if not text:
            logger.warning("OpenRouter returned an empty greeting, using fallback")
            return fallback_greeting(user.first_name)
        return text

    @staticmethod
    async def _read_stream(response: aiohttp.ClientResponse, on_chunk: ChunkCallback) -> str:
        parser = SSEDeltaParser()
        decoder = codecs.getincrementaldecoder("utf-8")()
        full_text = ""

        async for data in response.content.iter_any():
            for delta in parser.feed(decoder.decode(data)):
                full_text += delta
                await on_chunk(full_text)

        for delta in parser.feed(decoder.decode(b"", final=True) + "\n"):
            full_text += delta
            await on_chunk(full_text)

        return full_text.strip()

    async def generate_greeting(self, user: UserInfo) -> str:
        """Generate a greeting in one non-streaming request.

        Args:
            user: User the greeting is written for.

        Returns:
            Greeting text, or the fallback greeting if generation failed.
        """
        try:
            async with self._open_session() as session:
                async with session.post(
                    self.settings.api_url, json=self._payload(user, stream=False), headers=self._headers()
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise GenerationError(
                            f"OpenRouter API error: {response.status} - {error_text}"
                        )
                    data = await response.json()

            content = (data.get("choices") or [{}])[0].get("message", {}).get("content")
            if not content:
                raise GenerationError("Invalid response from OpenRouter")
            return content.strip()

        except Exception as e:
            logger.error(f"Error generating greeting: {e}")
            return fallback_greeting(user.first_name)
