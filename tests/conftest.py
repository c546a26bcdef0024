"""Global test configuration and fixtures.

Provides shared fixtures for all test levels including environment setup, a
sample Telegram user and a recording fake of the outbound Telegram channel.
"""

import os
import time
from unittest.mock import MagicMock

import pytest

from greeting_bot.bot.channel import ChannelError
from greeting_bot.config import StreamingConfig
from greeting_bot.models import UserInfo

TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "123456:test_bot_token_placeholder")
TEST_CHAT_ID = 4242


@pytest.fixture(autouse=True)
def test_environment():
    """Setup test environment variables for all tests."""
    test_env = {
        "TELEGRAM_BOT_TOKEN": TEST_BOT_TOKEN,
        "OPENROUTER_API_KEY": "test-openrouter-key",
        "SUNO_API_KEY": "test-suno-key",
    }

    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


class FakeChannel:
    """In-memory stand-in for TelegramChannel recording every call.

    ``fail_edits`` / ``fail_sends`` hold texts whose edit / send must fail;
    ``fail_all_edits`` makes every edit fail.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.edits: list[tuple[float, int, str]] = []
        self.sent: list[str] = []
        self.fail_edits: set[str] = set()
        self.fail_sends: set[str] = set()
        self.fail_all_edits = False
        self._next_message_id = 100

    async def send_new(self, chat_id: int, text: str) -> int:
        self.calls.append(("send_new", chat_id, text))
        if text in self.fail_sends:
            raise ChannelError(f"send failed: {text}")
        self.sent.append(text)
        self._next_message_id += 1
        return self._next_message_id

    async def edit_existing(self, chat_id: int, message_id: int, text: str) -> bool:
        self.calls.append(("edit_existing", chat_id, message_id, text))
        self.edits.append((time.monotonic(), message_id, text))
        if self.fail_all_edits or text in self.fail_edits:
            raise ChannelError(f"edit failed: {text}")
        return True

    async def send_chat_action(self, chat_id: int, action: str = "typing") -> None:
        self.calls.append(("send_chat_action", chat_id, action))

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        self.calls.append(("delete_message", chat_id, message_id))

    async def send_photo(self, chat_id: int, photo, caption: str) -> None:
        self.calls.append(("send_photo", chat_id, photo, caption))

    async def send_audio(self, chat_id: int, audio: str, title: str, performer: str, caption: str) -> None:
        self.calls.append(("send_audio", chat_id, audio, title, performer, caption))

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_channel() -> FakeChannel:
    """Recording fake of the outbound channel."""
    return FakeChannel()


@pytest.fixture
def sample_user() -> UserInfo:
    """Typical Telegram user requesting a greeting."""
    return UserInfo(
        id=777,
        chat_id=TEST_CHAT_ID,
        first_name="Анна",
        last_name="Иванова",
        username="anna",
        language_code="ru",
        is_premium=True,
    )


@pytest.fixture
def streaming_config() -> StreamingConfig:
    """Streaming settings with a short interval and no follow-ups."""
    return StreamingConfig(
        edit_throttle_ms=50,
        marker=" ▌",
        chat_action_interval=0.01,
        enable_image=False,
        enable_song=False,
    )


@pytest.fixture
def make_update():
    """Factory building MagicMock Telegram updates with a text message."""

    def _make_update(text: str | None = "Привет", with_user: bool = True) -> MagicMock:
        update = MagicMock()
        update.message.text = text
        update.message.chat_id = TEST_CHAT_ID
        if with_user:
            user = update.message.from_user
            user.id = 777
            user.first_name = "Анна"
            user.last_name = None
            user.username = "anna"
            user.language_code = "ru"
            user.is_premium = None
        else:
            update.message.from_user = None
        return update

    return _make_update
