"""Application entry point.

Main module that initializes and runs the Telegram bot application. Handles both
webhook mode (production, when WEBHOOK_URL is set) and polling mode (local
development). Configures logging, wires the DI container and registers bot
handlers.
"""

import logging

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from .bot.handlers import CONTAINER_KEY, error_handler, greeting, start
from .config import config
from .core.container import Container

# Logging
logging.basicConfig(
    format="%(asctime)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def build_application(container: Container | None = None) -> Application:
    """Create the bot application with handlers registered.

    Args:
        container: DI container, a fresh one if omitted.

    Returns:
        Configured Application, not yet running.
    """
    app = (
        Application.builder()
        .token(config.bot.bot_token)
        .concurrent_updates(True)
        .build()
    )
    app.bot_data[CONTAINER_KEY] = container or Container()

    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("greeting", greeting))
    app.add_handler(MessageHandler(filters.TEXT, greeting))
    app.add_error_handler(error_handler)

    return app


def main() -> None:
    """Main application entry point.

    Raises:
        RuntimeError: If TELEGRAM_BOT_TOKEN environment variable is not set.
    """
    if not config.bot.bot_token:
        raise RuntimeError("Set TELEGRAM_BOT_TOKEN environment variable")

    app = build_application()

    if config.bot.use_webhook:
        logger.info(f"Starting webhook at {config.bot.webhook_url}")
        app.run_webhook(
            listen=config.bot.listen_host,
            port=config.bot.port,
            url_path=config.bot.webhook_path,
            webhook_url=config.bot.webhook_url,
            allowed_updates=["message"],
        )
    else:
        logger.warning("No WEBHOOK_URL configured; falling back to long-polling")
        app.run_polling(allowed_updates=["message"])


if __name__ == "__main__":
    main()
