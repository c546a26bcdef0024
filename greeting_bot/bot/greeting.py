"""Greeting request orchestration.

Runs one greeting request end to end: placeholder message, streamed and
throttled greeting text, final edit with fallback, then the optional greeting
card and song follow-ups. Each run owns its own ``GreetingSession`` and
``EditThrottle``; only the channel and generator clients are shared.
"""

import asyncio
import contextlib
import logging
from functools import partial
from typing import Protocol

from telegram.constants import ChatAction

from ..config import StreamingConfig
from ..models import GreetingSession, GreetingState, Song, UserInfo
from ..services.imagegen import decode_data_url
from ..services.openrouter import ChunkCallback
from ..services.suno import StatusCallback
from .channel import ChannelError, TelegramChannel
from .edit_throttle import EditThrottle
from .messages import (
    CARD_CAPTION,
    CARD_FAILED,
    CARD_STATUS,
    GREETING_ERROR,
    GREETING_PLACEHOLDER,
    SONG_CAPTION,
    SONG_ERROR,
    SONG_FAILED,
    SONG_PERFORMER,
    SONG_READY,
    SONG_STATUS,
    SONG_STATUS_TEXTS,
)

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    async def generate_greeting_stream(self, user: UserInfo, on_chunk: ChunkCallback) -> str: ...


class CardGenerator(Protocol):
    async def generate_greeting_card(self, user: UserInfo) -> str | None: ...


class SongGenerator(Protocol):
    async def generate_song(
        self, user: UserInfo, on_status: StatusCallback | None = None
    ) -> Song | None: ...


class GreetingOrchestrator:
    """Coordinates one greeting request across generators and the channel.

    Responsibilities:
    - Send the placeholder and stream the greeting into it through the throttle
    - Recover from a failed final edit by sending the greeting as a new message
    - Report a single generic error when the greeting cannot be delivered
    - Run the greeting card and song follow-ups after a delivered greeting
    """

    def __init__(
        self,
        channel: TelegramChannel,
        text_generator: TextGenerator,
        image_generator: CardGenerator | None,
        song_generator: SongGenerator | None,
        streaming: StreamingConfig,
    ):
        """Initialize orchestrator.

        Args:
            channel: Outbound Telegram channel.
            text_generator: Streaming greeting source.
            image_generator: Greeting card generator, None to skip the card.
            song_generator: Song generator, None to skip the song.
            streaming: Throttle interval, marker and follow-up switches.
        """
        self.channel = channel
        self.text_generator = text_generator
        self.image_generator = image_generator if streaming.enable_image else None
        self.song_generator = song_generator if streaming.enable_song else None
        self.streaming = streaming

    async def run(self, user: UserInfo) -> GreetingSession:
        """Handle one greeting request.

        Args:
            user: User who asked for the greeting.

        Returns:
            The finished session, in DONE or FAILED state.
        """
        session = GreetingSession(chat_id=user.chat_id)
        logger.info(f"Generating greeting for user {user.id} in chat {user.chat_id}")

        try:
            await self._deliver_greeting(session, user)
        except Exception as e:
            logger.error(f"Error handling greeting: {e}")
            session.state = GreetingState.FAILED
            await self._report_failure(session.chat_id)
            return session

        session.state = GreetingState.DONE
        logger.info("Greeting sent successfully")

        if self.image_generator is not None:
            await self.send_greeting_card(user)
        if self.song_generator is not None:
            await self.send_song(user)

        return session

    async def _deliver_greeting(self, session: GreetingSession, user: UserInfo) -> None:
        await self.channel.send_chat_action(session.chat_id, ChatAction.TYPING)

        session.state = GreetingState.SENDING_PLACEHOLDER
        session.bind_message(await self.channel.send_new(session.chat_id, GREETING_PLACEHOLDER))

        session.state = GreetingState.STREAMING
        throttle = EditThrottle(
            partial(self.channel.edit_existing, session.chat_id, session.message_id),
            interval=self.streaming.edit_interval,
            marker=self.streaming.marker,
        )
        try:
            final_text = await self.text_generator.generate_greeting_stream(user, throttle.push)
            session.final_text = final_text

            session.state = GreetingState.FINALIZING
            try:
                await throttle.finish(final_text)
            except ChannelError as e:
                logger.warning(f"Final edit failed, sending greeting as a new message: {e}")
                await self.channel.send_new(session.chat_id, final_text)
        finally:
            throttle.cancel()

    async def _report_failure(self, chat_id: int) -> None:
        try:
            await self.channel.send_new(chat_id, GREETING_ERROR)
        except ChannelError as e:
            logger.error(f"Failed to report greeting failure to {chat_id}: {e}")

    async def send_greeting_card(self, user: UserInfo) -> None:
        """Generate and send the greeting card.

        Failures are logged and never interrupt the follow-up song.
        """
        if self.image_generator is None:
            return

        chat_id = user.chat_id
        try:
            status_message_id = await self.channel.send_new(chat_id, CARD_STATUS)
            await self.channel.send_chat_action(chat_id, ChatAction.UPLOAD_PHOTO)

            image_url = await self.image_generator.generate_greeting_card(user)

            if not image_url:
                await self.channel.edit_existing(chat_id, status_message_id, CARD_FAILED)
                return

            await self.channel.delete_message(chat_id, status_message_id)
            photo = decode_data_url(image_url) or image_url
            await self.channel.send_photo(chat_id, photo, caption=CARD_CAPTION)
            logger.info("Greeting card sent successfully")

        except Exception as e:
            logger.error(f"Error generating image: {e}")

    async def send_song(self, user: UserInfo) -> None:
        """Generate and send the personal song, keeping the user informed."""
        if self.song_generator is None:
            return

        chat_id = user.chat_id
        status_message_id: int | None = None

        async def on_status(status: str) -> None:
            text = SONG_STATUS_TEXTS.get(status)
            if text and status_message_id is not None:
                try:
                    await self.channel.edit_existing(chat_id, status_message_id, text)
                except ChannelError as e:
                    logger.warning(f"Failed to update song status to {status}: {e}")

        try:
            status_message_id = await self.channel.send_new(chat_id, SONG_STATUS)

            action_task = asyncio.create_task(self._repeat_chat_action(chat_id, ChatAction.UPLOAD_VOICE))
            try:
                song = await self.song_generator.generate_song(user, on_status)
            finally:
                action_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await action_task

            if song is None or not song.audio_url:
                await self.channel.edit_existing(chat_id, status_message_id, SONG_FAILED)
                return

            await self.channel.edit_existing(chat_id, status_message_id, SONG_READY)
            await self.channel.send_audio(
                chat_id,
                song.audio_url,
                title=song.title,
                performer=SONG_PERFORMER,
                caption=SONG_CAPTION.format(title=song.title),
            )
            await self.channel.delete_message(chat_id, status_message_id)
            logger.info(f"Song sent successfully: {song.title}")

        except Exception as e:
            logger.error(f"Error generating song: {e}")
            if status_message_id is not None:
                try:
                    await self.channel.edit_existing(chat_id, status_message_id, SONG_ERROR)
                except ChannelError as edit_error:
                    logger.warning(f"Failed to report song error: {edit_error}")

    async def _repeat_chat_action(self, chat_id: int, action: str) -> None:
        while True:
            await self.channel.send_chat_action(chat_id, action)
            await asyncio.sleep(self.streaming.chat_action_interval)
