"""Outbound Telegram channel.

Thin wrapper around ``telegram.Bot`` exposing the narrow operations the
greeting flow needs: sending and editing text, chat actions, media and
deletion. Every failure of the Bot API is raised as ``ChannelError`` so callers
decide whether it is fatal, except for the best-effort helpers which only log.
"""

import logging
from typing import IO

from telegram import Bot
from telegram.constants import ChatAction
from telegram.error import BadRequest, TelegramError

logger = logging.getLogger(__name__)

NOT_MODIFIED = "message is not modified"


class ChannelError(Exception):
    """Raised when a Telegram Bot API call fails."""


class TelegramChannel:
    """Outbound messaging operations bound to one bot instance.

    The channel keeps no per-chat state and can be shared by concurrent
    greeting sessions.
    """

    def __init__(self, bot: Bot):
        """Initialize channel.

        Args:
            bot: Telegram bot used for all API calls.
        """
        self.bot = bot

    async def send_new(self, chat_id: int, text: str) -> int:
        """Send a new text message.

        Args:
            chat_id: Target chat.
            text: Message text.

        Returns:
            ID of the sent message.

        Raises:
            ChannelError: If the Bot API call fails.
        """
        try:
            message = await self.bot.send_message(chat_id=chat_id, text=text)
        except TelegramError as e:
            raise ChannelError(f"sendMessage failed: {e}") from e
        return message.message_id

    async def edit_existing(self, chat_id: int, message_id: int, text: str) -> bool:
        """Replace the text of an existing message.

        Editing a message to the text it already bears is accepted as success.

        Args:
            chat_id: Chat holding the message.
            message_id: Message to edit.
            text: New message text.

        Returns:
            True once the message shows ``text``.

        Raises:
            ChannelError: If the Bot API call fails.
        """
        try:
            await self.bot.edit_message_text(chat_id=chat_id, message_id=message_id, text=text)
        except BadRequest as e:
            if NOT_MODIFIED in str(e).lower():
                return True
            raise ChannelError(f"editMessageText failed: {e}") from e
        except TelegramError as e:
            raise ChannelError(f"editMessageText failed: {e}") from e
        return True

    async def send_chat_action(self, chat_id: int, action: str = ChatAction.TYPING) -> None:
        """Show a chat action such as "typing" (best effort)."""
        try:
            await self.bot.send_chat_action(chat_id=chat_id, action=action)
        except TelegramError as e:
            logger.warning(f"Failed to send chat action {action} to {chat_id}: {e}")

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        """Delete a message (best effort)."""
        try:
            await self.bot.delete_message(chat_id=chat_id, message_id=message_id)
        except TelegramError as e:
            logger.debug(f"Failed to delete message {message_id} in {chat_id}: {e}")

    async def send_photo(self, chat_id: int, photo: str | bytes | IO[bytes], caption: str) -> None:
        """Send a photo by URL or raw bytes.

        Raises:
            ChannelError: If the Bot API call fails.
        """
        try:
            await self.bot.send_photo(chat_id=chat_id, photo=photo, caption=caption)
        except TelegramError as e:
            raise ChannelError(f"sendPhoto failed: {e}") from e

    async def send_audio(
        self, chat_id: int, audio: str, title: str, performer: str, caption: str
    ) -> None:
        """Send an audio file by URL.

        Raises:
            ChannelError: If the Bot API call fails.
        """
        try:
            await self.bot.send_audio(
                chat_id=chat_id, audio=audio, title=title, performer=performer, caption=caption
            )
        except TelegramError as e:
            raise ChannelError(f"sendAudio failed: {e}") from e
