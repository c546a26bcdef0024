"""Greeting card generation using OpenRouter image-capable models.

Asks a Gemini image model for a deliberately kitschy "Pole Chudes" style New
Year card and returns the first image it produces.
"""

import base64
import binascii
import logging

import aiohttp

from ..config import OpenRouterConfig
from ..models import UserInfo
from .http import GenerationError, HTTPClient
from .prompts import build_image_prompt

logger = logging.getLogger(__name__)


def decode_data_url(url: str) -> bytes | None:
    """Decode a base64 ``data:`` URL into raw bytes.

    Args:
        url: Image URL as returned by the API.

    Returns:
        Image bytes for base64 data URLs, None for any other URL.
    """
    if not url.startswith("data:"):
        return None

    header, _, encoded = url.partition(",")
    if not header.endswith(";base64"):
        return None

    try:
        return base64.b64decode(encoded)
    except (binascii.Error, ValueError):
        logger.warning("Malformed base64 image data URL")
        return None


class ImageGenerator(HTTPClient):
    """Greeting card generator."""

    def __init__(
        self,
        settings: OpenRouterConfig,
        timeout: float = 60,
        session: aiohttp.ClientSession | None = None,
    ):
        super().__init__(timeout, session)
        self.settings = settings

    async def generate_greeting_card(self, user: UserInfo) -> str | None:
        """Generate a greeting card image.

        Args:
            user: User whose name goes on the card.

        Returns:
            Image URL (usually a base64 ``data:`` URL), or None on failure.
        """
        payload = {
            "model": self.settings.image_model,
            "messages": [{"role": "user", "content": build_image_prompt(user)}],
            "modalities": ["image", "text"],
            "max_tokens": self.settings.image_max_tokens,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_key}",
            "HTTP-Referer": self.settings.referer,
            "X-Title": self.settings.title,
        }

        try:
            logger.info("Generating greeting card image...")
            async with self._open_session() as session:
                async with session.post(self.settings.api_url, json=payload, headers=headers) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise GenerationError(
                            f"OpenRouter image API error: {response.status} - {error_text}"
                        )
                    data = await response.json()

        except Exception as e:
            logger.error(f"Error generating image: {e}")
            return None

        message = (data.get("choices") or [{}])[0].get("message") or {}
        for image in message.get("images") or []:
            url = (image.get("image_url") or {}).get("url")
            if url:
                logger.info("Image generated successfully")
                return url

        logger.info("No image in response")
        return None
