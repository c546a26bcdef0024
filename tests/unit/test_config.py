"""Tests for configuration loading."""

from greeting_bot.config import BotConfig, Config, StreamingConfig


def test_bot_config_listen_host_defaults_to_localhost(monkeypatch) -> None:
    """BotConfig should bind to localhost by default for safer webhooks."""
    monkeypatch.delenv("BOT_LISTEN_HOST", raising=False)

    bot_config = BotConfig()

    assert bot_config.listen_host == "127.0.0.1"


def test_bot_config_listen_host_env_override(monkeypatch) -> None:
    monkeypatch.setenv("BOT_LISTEN_HOST", "0.0.0.0")

    assert BotConfig().listen_host == "0.0.0.0"


def test_polling_mode_without_webhook_url(monkeypatch) -> None:
    monkeypatch.delenv("WEBHOOK_URL", raising=False)

    bot_config = BotConfig()

    assert bot_config.use_webhook is False
    assert bot_config.webhook_path == "/webhook"


def test_webhook_path_follows_webhook_url(monkeypatch) -> None:
    monkeypatch.setenv("WEBHOOK_URL", "https://bot.example.com/hooks/newyear")

    bot_config = BotConfig()

    assert bot_config.use_webhook is True
    assert bot_config.webhook_path == "/hooks/newyear"


def test_streaming_defaults(monkeypatch) -> None:
    """Edits are throttled to 500ms with the block marker by default."""
    for name in ("EDIT_THROTTLE_MS", "ENABLE_IMAGE", "ENABLE_SONG"):
        monkeypatch.delenv(name, raising=False)

    streaming = StreamingConfig()

    assert streaming.edit_throttle_ms == 500
    assert streaming.edit_interval == 0.5
    assert streaming.marker == " ▌"
    assert streaming.enable_image is True
    assert streaming.enable_song is True


def test_streaming_env_override(monkeypatch) -> None:
    monkeypatch.setenv("EDIT_THROTTLE_MS", "1000")
    monkeypatch.setenv("ENABLE_SONG", "false")

    streaming = StreamingConfig()

    assert streaming.edit_interval == 1.0
    assert streaming.enable_song is False


def test_generation_yaml_overrides_defaults(tmp_path) -> None:
    (tmp_path / "generation.yml").write_text(
        "openrouter:\n"
        "  text_model: anthropic/claude-3-haiku\n"
        "  temperature: 0.5\n"
        "suno:\n"
        "  model: V4_5\n"
        "  max_attempts: 10\n"
        "streaming:\n"
        "  marker: ' …'\n",
        encoding="utf-8",
    )

    config = Config(config_dir=tmp_path)

    assert config.openrouter.text_model == "anthropic/claude-3-haiku"
    assert config.openrouter.temperature == 0.5
    assert config.openrouter.api_key == "test-openrouter-key"
    assert config.suno.model == "V4_5"
    assert config.suno.max_attempts == 10
    assert config.suno.api_key == "test-suno-key"
    assert config.streaming.marker == " …"


def test_missing_generation_yaml_uses_defaults(tmp_path) -> None:
    config = Config(config_dir=tmp_path)

    assert config.openrouter.text_model == "openai/gpt-4o-mini"
    assert config.suno.poll_interval == 5.0
    assert config.bot.bot_token


def test_packaged_generation_yaml_loads() -> None:
    config = Config()

    assert config.openrouter.api_url.startswith("https://openrouter.ai/")
    assert config.streaming.chat_action_interval > 0
