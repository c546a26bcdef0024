"""Telegram bot handlers.

Thin handlers that extract the user from the update and delegate the
greeting request to the orchestrator wired in the DI container.
"""

import logging

from telegram import Update
from telegram.ext import ContextTypes

from ..core.container import Container
from ..models import UserInfo
from .channel import TelegramChannel
from .messages import format_start_message

logger = logging.getLogger(__name__)

CONTAINER_KEY = "container"


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command.

    Sends the welcome message explaining how to get a greeting.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    user = UserInfo.from_update(update)
    if user is None or update.message is None:
        logger.info("No user info in update, skipping")
        return

    logger.info(f"/start from {user.first_name or 'Unknown'} (@{user.username or 'no username'})")
    await update.message.reply_text(format_start_message(user.first_name))


async def greeting(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /greeting command and any other text message.

    Streams a personalized greeting into the chat, then sends the greeting
    card and song.

    Args:
        update: Telegram update object containing message data.
        context: Bot context holding the DI container in ``bot_data``.
    """
    user = UserInfo.from_update(update)
    if user is None:
        logger.info("No user info in update, skipping")
        return

    text = update.message.text if update.message else ""
    logger.info(
        f"Message from {user.first_name or 'Unknown'} (@{user.username or 'no username'}): {text}"
    )

    container: Container = context.bot_data[CONTAINER_KEY]
    orchestrator = container.greeting_orchestrator(channel=TelegramChannel(context.bot))
    session = await orchestrator.run(user)
    logger.info(f"Greeting session for chat {session.chat_id} finished: {session.state.value}")


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log exceptions raised while processing updates."""
    logger.error(f"Error processing update {update}: {context.error}", exc_info=context.error)
