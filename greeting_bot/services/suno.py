"""Suno API integration for generating New Year songs.

Starts an asynchronous song generation task and polls it until the first
song is ready, the task fails, or the polling budget runs out.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from ..config import SunoConfig
from ..models import Song, UserInfo
from .http import GenerationError, HTTPClient
from .prompts import build_song_prompt

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], Awaitable[None]]

STATUS_STARTING = "starting"
STATUS_GENERATING = "generating"
STATUS_ALMOST_DONE = "almost_done"


class SunoClient(HTTPClient):
    """Song generator backed by the Suno API."""

    def __init__(
        self,
        settings: SunoConfig,
        timeout: float = 60,
        session: aiohttp.ClientSession | None = None,
    ):
        super().__init__(timeout, session)
        self.settings = settings

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_key}",
        }

    async def generate_song(
        self, user: UserInfo, on_status: StatusCallback | None = None
    ) -> Song | None:
        """Generate a personalized New Year song.

        Args:
            user: User the song is written for.
            on_status: Optional callback receiving progress status names.

        Returns:
            The first generated song, or None on failure or timeout.
        """
        prompt = build_song_prompt(user, self.settings.style)

        try:
            await self._notify(on_status, STATUS_STARTING)

            async with self._open_session() as session:
                task_id = await self._start(session, prompt.lyrics, prompt.style, prompt.title)
                logger.info(f"Suno task started: {task_id}")

                await self._notify(on_status, STATUS_GENERATING)

                return await self._poll_for_completion(session, task_id, on_status)

        except Exception as e:
            logger.error(f"Error generating song: {e}")
            return None

    @staticmethod
    async def _notify(on_status: StatusCallback | None, status: str) -> None:
        """Report progress to the caller (best effort)."""
        if on_status is None:
            return
        try:
            await on_status(status)
        except Exception as e:
            logger.warning(f"Status callback failed for {status}: {e}")

    async def _start(
        self, session: aiohttp.ClientSession, lyrics: str, style: str, title: str
    ) -> str:
        payload = {
            "customMode": True,
            "instrumental": False,
            "prompt": lyrics,
            "style": style,
            "title": title,
            "model": self.settings.model,
            "callBackUrl": self.settings.callback_url,
        }
        url = f"{self.settings.base_url}/api/v1/generate"

        async with session.post(url, json=payload, headers=self._headers()) as response:
            data = await response.json()

        logger.debug(f"Suno generate response: {data}")
        if data.get("code") != 200:
            raise GenerationError(f"Suno API error: {data.get('msg')}")

        return data["data"]["taskId"]

    async def _poll_for_completion(
        self,
        session: aiohttp.ClientSession,
        task_id: str,
        on_status: StatusCallback | None,
    ) -> Song | None:
        url = f"{self.settings.base_url}/api/v1/generate/record-info"

        for attempt in range(1, self.settings.max_attempts + 1):
            try:
                async with session.get(
                    url, params={"taskId": task_id}, headers=self._headers()
                ) as response:
                    data = await response.json()
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                logger.warning(f"Poll attempt {attempt} error: {e}")
                await asyncio.sleep(self.settings.poll_interval)
                continue

            record = data.get("data") or {}
            status = record.get("status") or ""
            logger.info(f"Suno poll attempt {attempt}: {status}")

            if status == "SUCCESS":
                return self._first_song(record)

            if status == "FIRST_SUCCESS":
                await self._notify(on_status, STATUS_ALMOST_DONE)

            if "FAILED" in status or "ERROR" in status:
                logger.error(f"Suno generation failed: {status}")
                return None

            await asyncio.sleep(self.settings.poll_interval)

        logger.warning("Suno polling timeout")
        return None

    @staticmethod
    def _first_song(record: dict[str, Any]) -> Song | None:
        songs = (record.get("response") or {}).get("sunoData") or []
        if not songs:
            return None

        song = songs[0]
        logger.info(f"Song generated: {song.get('title')} {song.get('audioUrl')}")
        return Song(
            id=song.get("id"),
            title=song.get("title") or "",
            audio_url=song.get("audioUrl"),
            stream_url=song.get("streamAudioUrl"),
            image_url=song.get("imageUrl"),
            duration=song.get("duration"),
        )
