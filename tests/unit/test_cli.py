"""Tests for the webhook management command."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from greeting_bot import cli


@pytest.fixture
def bot() -> AsyncMock:
    bot = AsyncMock()
    bot.set_webhook.return_value = True
    bot.delete_webhook.return_value = True
    bot.get_webhook_info.return_value = MagicMock(
        to_dict=MagicMock(return_value={"url": "https://bot.example.com/webhook", "pending_update_count": 0})
    )
    return bot


@pytest.mark.parametrize(
    ("url", "valid"),
    [
        ("https://bot.example.com/webhook", True),
        ("https://your-domain.com/webhook", False),
        ("", False),
        (None, False),
    ],
)
def test_webhook_url_is_valid(url, valid):
    assert cli.webhook_url_is_valid(url) is valid


def test_parser_defaults_to_set():
    assert cli.build_parser().parse_args([]).command == "set"
    assert cli.build_parser().parse_args(["info"]).command == "info"


def test_parser_rejects_unknown_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["restart"])


@pytest.mark.asyncio
async def test_set_webhook_registers_url(bot):
    assert await cli.set_webhook(bot, "https://bot.example.com/webhook") == 0

    bot.set_webhook.assert_awaited_once_with(
        url="https://bot.example.com/webhook", allowed_updates=["message"]
    )


@pytest.mark.asyncio
async def test_set_webhook_with_placeholder_url_fails(bot, capsys):
    assert await cli.set_webhook(bot, "https://your-domain.com/webhook") == 1

    bot.set_webhook.assert_not_awaited()
    assert "WEBHOOK_URL" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_webhook_info_prints_json(bot, capsys):
    assert await cli.webhook_info(bot) == 0

    assert '"pending_update_count": 0' in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_dispatches_delete(bot):
    assert await cli.run("delete", bot) == 0

    bot.delete_webhook.assert_awaited_once()
    bot.set_webhook.assert_not_awaited()


@pytest.mark.asyncio
async def test_run_set_uses_configured_url(bot):
    with patch.object(cli.config.bot, "webhook_url", "https://bot.example.com/hook"):
        assert await cli.run("set", bot) == 0

    bot.set_webhook.assert_awaited_once_with(url="https://bot.example.com/hook", allowed_updates=["message"])


def test_main_without_token_exits(capsys):
    with patch.object(cli.config.bot, "bot_token", ""), pytest.raises(SystemExit) as exc:
        cli.main(["info"])

    assert exc.value.code == 1
    assert "TELEGRAM_BOT_TOKEN" in capsys.readouterr().err
