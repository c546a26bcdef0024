"""Tests for greeting card generation."""

import base64
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from greeting_bot.config import OpenRouterConfig
from greeting_bot.services.imagegen import ImageGenerator, decode_data_url


def image_response(payload: dict, status: int = 200) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value="model overloaded")
    return response


def make_session(response: MagicMock) -> MagicMock:
    session = MagicMock(spec=aiohttp.ClientSession)
    session.post.return_value.__aenter__.return_value = response
    return session


@pytest.fixture
def image_settings() -> OpenRouterConfig:
    return OpenRouterConfig(api_key="test-key")


class TestDecodeDataUrl:
    def test_decodes_base64_payload(self):
        raw = b"\x89PNG\r\n\x1a\n"
        url = "data:image/png;base64," + base64.b64encode(raw).decode()

        assert decode_data_url(url) == raw

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/card.png",
            "data:image/svg+xml,<svg></svg>",
            "data:image/png;base64,@@not-base64@@",
        ],
    )
    def test_rejects_other_urls(self, url):
        assert decode_data_url(url) is None


class TestGenerateGreetingCard:
    @pytest.mark.asyncio
    async def test_returns_first_image_url(self, image_settings, sample_user):
        response = image_response(
            {
                "choices": [
                    {
                        "message": {
                            "content": "Вот ваша открытка",
                            "images": [
                                {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
                                {"type": "image_url", "image_url": {"url": "https://example.com/2.png"}},
                            ],
                        }
                    }
                ]
            }
        )
        session = make_session(response)
        generator = ImageGenerator(image_settings, session=session)

        assert await generator.generate_greeting_card(sample_user) == "data:image/png;base64,AAAA"

        _, kwargs = session.post.call_args
        assert kwargs["json"]["modalities"] == ["image", "text"]
        assert kwargs["json"]["model"] == image_settings.image_model
        assert "С Новым Годом, Анна!" in kwargs["json"]["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_response_without_images_returns_none(self, image_settings, sample_user):
        response = image_response({"choices": [{"message": {"content": "Sorry, text only"}}]})
        generator = ImageGenerator(image_settings, session=make_session(response))

        assert await generator.generate_greeting_card(sample_user) is None

    @pytest.mark.asyncio
    async def test_http_error_returns_none(self, image_settings, sample_user):
        response = image_response({}, status=503)
        generator = ImageGenerator(image_settings, session=make_session(response))

        assert await generator.generate_greeting_card(sample_user) is None
        response.json.assert_not_awaited()
