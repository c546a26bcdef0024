"""Webhook management command.

Registers, inspects or removes the bot's Telegram webhook:

    greeting-bot-webhook [set|info|delete]
"""

import argparse
import asyncio
import json
import logging
import sys

from telegram import Bot

from .config import config

WEBHOOK_HELP = """Error: Please set WEBHOOK_URL in your .env file
Example: WEBHOOK_URL=https://your-server.com/webhook

You can use ngrok for local development:
  1. Install ngrok: brew install ngrok
  2. Run: ngrok http 3000
  3. Copy the https URL and add /webhook"""


def webhook_url_is_valid(url: str | None) -> bool:
    """Check that a webhook URL is set and not the example placeholder."""
    return bool(url) and "your-domain" not in url


async def set_webhook(bot: Bot, url: str | None) -> int:
    """Register the webhook URL.

    Returns:
        Process exit code.
    """
    if not webhook_url_is_valid(url):
        print(WEBHOOK_HELP, file=sys.stderr)
        return 1

    print(f"Setting webhook to: {url}")
    async with bot:
        ok = await bot.set_webhook(url=url, allowed_updates=["message"])

    if ok:
        print("Webhook set successfully!")
        return 0
    print("Failed to set webhook", file=sys.stderr)
    return 1


async def webhook_info(bot: Bot) -> int:
    """Print the current webhook info as JSON."""
    print("Getting webhook info...")
    async with bot:
        info = await bot.get_webhook_info()

    print("\nWebhook Info:")
    print(json.dumps(info.to_dict(), indent=2, ensure_ascii=False))
    return 0


async def delete_webhook(bot: Bot) -> int:
    """Remove the webhook."""
    print("Deleting webhook...")
    async with bot:
        ok = await bot.delete_webhook()

    if ok:
        print("Webhook deleted successfully!")
        return 0
    print("Failed to delete webhook", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="greeting-bot-webhook", description="Telegram webhook setup"
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="set",
        choices=["set", "info", "delete"],
        help="set the webhook URL (default), show webhook info, or delete the webhook",
    )
    return parser


async def run(command: str, bot: Bot) -> int:
    """Dispatch a webhook command.

    Args:
        command: One of ``set``, ``info``, ``delete``.
        bot: Bot used for the API calls.

    Returns:
        Process exit code.
    """
    if command == "set":
        return await set_webhook(bot, config.bot.webhook_url)
    if command == "info":
        return await webhook_info(bot)
    return await delete_webhook(bot)


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point."""
    logging.basicConfig(format="%(asctime)s - %(levelname)s - %(message)s", level=logging.WARNING)
    args = build_parser().parse_args(argv)

    if not config.bot.bot_token:
        print("Error: Please set TELEGRAM_BOT_TOKEN in your .env file", file=sys.stderr)
        sys.exit(1)

    print("Telegram Webhook Setup")
    print("======================\n")

    sys.exit(asyncio.run(run(args.command, Bot(config.bot.bot_token))))


if __name__ == "__main__":
    main()
