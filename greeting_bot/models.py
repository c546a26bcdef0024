"""Data models for the greeting bot application.

Defines Pydantic models for the data structures used throughout the
application: the Telegram user a greeting is written for, the per-request
greeting session, prompts and generated songs.
"""

from enum import Enum

from pydantic import BaseModel
from telegram import Update


class UserInfo(BaseModel):
    """Telegram user a greeting is generated for.

    Attributes:
        id: Telegram user ID.
        chat_id: Chat the request came from and replies go to.
        first_name: User's first name, if set.
        last_name: User's last name, if set.
        username: Telegram username without @, if set.
        language_code: IETF language tag reported by the client.
        is_premium: Whether the user has Telegram Premium.
    """

    id: int
    chat_id: int
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    is_premium: bool = False

    @classmethod
    def from_update(cls, update: Update) -> "UserInfo | None":
        """Extract user information from a Telegram update.

        Args:
            update: Incoming Telegram update.

        Returns:
            UserInfo for message updates with a sender, None otherwise.
        """
        message = update.message
        if message is None or message.from_user is None:
            return None

        user = message.from_user
        return cls(
            id=user.id,
            chat_id=message.chat_id,
            first_name=user.first_name or None,
            last_name=user.last_name or None,
            username=user.username or None,
            language_code=user.language_code or None,
            is_premium=bool(user.is_premium),
        )


class GreetingState(str, Enum):
    """Lifecycle of one greeting request."""

    IDLE = "idle"
    SENDING_PLACEHOLDER = "sending_placeholder"
    STREAMING = "streaming"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


class GreetingSession(BaseModel):
    """State of a single greeting request.

    Owned by one orchestrator run and never shared between requests. The
    throttle state (last edit time, pending text, deferred timer) lives in the
    EditThrottle bound to this session's placeholder message.

    Attributes:
        chat_id: Chat the greeting is streamed into.
        message_id: Placeholder message being edited, set once through ``bind_message``.
        state: Current lifecycle state.
        final_text: Completed greeting text once streaming has finished.
    """

    chat_id: int
    message_id: int | None = None
    state: GreetingState = GreetingState.IDLE
    final_text: str | None = None

    def bind_message(self, message_id: int) -> None:
        """Record the placeholder message the greeting is streamed into.

        Args:
            message_id: ID of the sent placeholder.

        Raises:
            ValueError: If the session is already bound to a message.
        """
        if self.message_id is not None:
            raise ValueError(f"Session already bound to message {self.message_id}")
        self.message_id = message_id


class SongPrompt(BaseModel):
    """Lyrics, style and title sent to the song generator."""

    lyrics: str
    style: str
    title: str


class Song(BaseModel):
    """Generated song returned by the song API.

    Attributes:
        id: Song identifier on the provider side.
        title: Song title.
        audio_url: Downloadable audio file URL.
        stream_url: Streaming audio URL.
        image_url: Cover image URL.
        duration: Duration in seconds.
    """

    id: str | None = None
    title: str = ""
    audio_url: str | None = None
    stream_url: str | None = None
    image_url: str | None = None
    duration: float | None = None
