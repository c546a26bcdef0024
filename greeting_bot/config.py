"""Configuration management for the greeting bot.

Handles all application configuration including environment variables, the
YAML generation config file, and default settings. Provides structured
configuration classes for the bot itself, the generation APIs and the
streaming behaviour.
"""

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


class BotConfig(BaseSettings):
    """Main Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        webhook_url: Public HTTPS URL Telegram should deliver updates to.
        port: Server port for webhook mode.
        listen_host: Interface the webhook server binds to.
        timeout: HTTP request timeout in seconds for generation APIs.
    """

    model_config = _ENV

    bot_token: str = Field(default="", validation_alias="TELEGRAM_BOT_TOKEN")
    webhook_url: str | None = Field(default=None, validation_alias="WEBHOOK_URL")
    port: int = Field(default=3000, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    timeout: int = Field(default=60, validation_alias="HTTP_TIMEOUT")

    @property
    def use_webhook(self) -> bool:
        """Determine if webhook mode should be used.

        Returns:
            True if a webhook URL is configured, False for polling mode.
        """
        return bool(self.webhook_url)

    @property
    def webhook_path(self) -> str:
        """Get the local URL path the webhook server listens on.

        Returns:
            Path component of the webhook URL, ``/webhook`` if it has none.
        """
        if not self.webhook_url:
            return "/webhook"
        return urlparse(self.webhook_url).path or "/webhook"


class OpenRouterConfig(BaseSettings):
    """OpenRouter chat-completions settings for text and image generation.

    Attributes:
        api_key: OpenRouter API key.
        api_url: Chat-completions endpoint.
        text_model: Model used for the streamed greeting.
        image_model: Model used for the greeting card.
        max_tokens: Token limit for the greeting.
        temperature: Sampling temperature for the greeting.
        image_max_tokens: Token limit for the image request.
        referer: Value of the ``HTTP-Referer`` attribution header.
        title: Value of the ``X-Title`` attribution header.
    """

    model_config = _ENV

    api_key: str = Field(default="", validation_alias="OPENROUTER_API_KEY")
    api_url: str = "https://openrouter.ai/api/v1/chat/completions"
    text_model: str = "openai/gpt-4o-mini"
    image_model: str = "google/gemini-2.5-flash-preview-image-generation"
    max_tokens: int = 500
    temperature: float = 0.8
    image_max_tokens: int = 1000
    referer: str = "https://newyear-bot.local"
    title: str = "New Year Greeting Bot"


class SunoConfig(BaseSettings):
    """Suno song generation settings.

    Attributes:
        api_key: Suno API key.
        base_url: Suno API base URL.
        model: Suno model version.
        style: Musical style description sent with the lyrics.
        callback_url: Callback URL the API requires; results are polled.
        poll_interval: Seconds between status polls.
        max_attempts: Poll attempts before giving up (36 x 5s = 3 minutes).
    """

    model_config = _ENV

    api_key: str = Field(default="", validation_alias="SUNO_API_KEY")
    base_url: str = "https://api.sunoapi.org"
    model: str = "V4"
    style: str = "russian pop, festive, happy new year, cheerful, synthesizer, 90s russian estrada"
    callback_url: str = "https://example.com/suno-callback"
    poll_interval: float = 5.0
    max_attempts: int = 36


class StreamingConfig(BaseSettings):
    """Streaming edit behaviour.

    Attributes:
        edit_throttle_ms: Minimum milliseconds between two edits of one message.
        marker: Suffix shown on the message while generation is in progress.
        chat_action_interval: Seconds between repeated chat actions.
        enable_image: Whether to send a greeting card after the text.
        enable_song: Whether to send a song after the card.
    """

    model_config = _ENV

    edit_throttle_ms: int = Field(default=500, validation_alias="EDIT_THROTTLE_MS")
    marker: str = " ▌"
    chat_action_interval: float = 4.0
    enable_image: bool = Field(default=True, validation_alias="ENABLE_IMAGE")
    enable_song: bool = Field(default=True, validation_alias="ENABLE_SONG")

    @property
    def edit_interval(self) -> float:
        """Minimum interval between edits in seconds."""
        return self.edit_throttle_ms / 1000


class Config:
    """Application configuration manager.

    Centralizes loading of environment variables and the YAML generation
    config. Values from ``generation.yml`` override both the built-in
    defaults and the environment, so secrets stay out of the YAML file.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to greeting_bot/config.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)
        self.bot = BotConfig()

        generation = self._load_generation()
        self.openrouter = OpenRouterConfig(**generation.get("openrouter", {}))
        self.suno = SunoConfig(**generation.get("suno", {}))
        self.streaming = StreamingConfig(**generation.get("streaming", {}))

    def _load_generation(self) -> dict[str, Any]:
        """Load generation settings from YAML configuration.

        Returns:
            Mapping of section name to settings, empty if the file is missing.
        """
        generation_path = self.config_dir / "generation.yml"
        if not generation_path.exists():
            return {}

        with open(generation_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return data or {}


# Global configuration instance
config = Config()
