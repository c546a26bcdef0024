"""Rate-limited streaming of partial generations into message edits.

The generation API emits the full text so far many times per second, while
Telegram rejects edits of one message that come too often. ``EditThrottle``
sits between the two: it edits right away when the last edit is old enough,
otherwise it schedules one trailing edit that sends whatever text is newest
when it fires. Completion always flushes the final text immediately.

Precondition: chunks for one throttle are delivered sequentially, i.e. each
``push`` is awaited before the next one starts. The throttle does not try to
order concurrent producers.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.5
DEFAULT_MARKER = " ▌"

EditFunc = Callable[[str], Awaitable[object]]


class ThrottleState(str, Enum):
    """Whether a trailing edit is waiting to fire."""

    IDLE = "idle"
    SCHEDULED = "scheduled"


class EditThrottle:
    """Trailing-edge edit scheduler with a mandatory final flush.

    Guarantees for one bound message:
    - two progress edits never start less than ``interval`` seconds apart;
    - only the newest pending text is sent, older chunks are coalesced;
    - progress edits carry ``marker``, the final edit is the exact final text;
    - edit calls never overlap and the final edit is always the last call.

    Progress edit failures are logged and swallowed. The final edit's failure
    is raised to the caller.
    """

    def __init__(
        self,
        edit: EditFunc,
        interval: float = DEFAULT_INTERVAL,
        marker: str = DEFAULT_MARKER,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize throttle.

        Args:
            edit: Coroutine function editing the bound message to the given text.
            interval: Minimum seconds between two progress edits.
            marker: Suffix appended to progress edits.
            clock: Monotonic time source in seconds.
        """
        self._edit = edit
        self.interval = interval
        self.marker = marker
        self._clock = clock

        self._last_edit_time: float | None = None
        self._pending_text = ""
        self._last_sent_text: str | None = None
        self._timer: asyncio.Task[None] | None = None
        self._firing: asyncio.Task[None] | None = None
        self._lock = asyncio.Lock()
        self._finished = False

    @property
    def state(self) -> ThrottleState:
        """Current scheduler state."""
        return ThrottleState.SCHEDULED if self._timer is not None else ThrottleState.IDLE

    @property
    def pending_text(self) -> str:
        """Newest text received so far."""
        return self._pending_text

    async def push(self, text: str) -> None:
        """Accept a new chunk (full text so far).

        Args:
            text: Complete text generated so far.

        Raises:
            RuntimeError: If called after ``finish`` or ``cancel``.
        """
        if self._finished:
            raise RuntimeError("EditThrottle already finished")

        self._pending_text = text
        self._cancel_timer()

        now = self._clock()
        if self._last_edit_time is None or now - self._last_edit_time >= self.interval:
            await self._send_progress()
            return

        delay = self._last_edit_time + self.interval - now
        self._timer = asyncio.create_task(self._fire_after(delay))

    async def finish(self, text: str) -> None:
        """Send the final text, bypassing the interval.

        Any scheduled trailing edit is dropped; its text is superseded by
        ``text``. An edit already in flight completes first.

        Args:
            text: Final generated text, sent verbatim.

        Raises:
            Exception: Whatever the edit function raised for the final edit.
        """
        self._finished = True
        self._pending_text = text
        self._cancel_timer()

        if self._firing is not None and not self._firing.done():
            await self._firing

        async with self._lock:
            self._last_edit_time = self._clock()
            await self._edit(text)

    def cancel(self) -> None:
        """Stop the throttle without a final edit."""
        self._finished = True
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _fire_after(self, delay: float) -> None:
        await asyncio.sleep(delay)

        # Past this point the edit must not be cancelled by a newer chunk
        self._firing, self._timer = self._timer, None
        await self._send_progress()

    async def _send_progress(self) -> None:
        async with self._lock:
            if self._finished or self._pending_text == self._last_sent_text:
                return

            # An earlier edit may have been sent while this one waited for the lock
            if self._last_edit_time is not None:
                remaining = self._last_edit_time + self.interval - self._clock()
                if remaining > 0:
                    if self._timer is None:
                        self._timer = asyncio.create_task(self._fire_after(remaining))
                    return

            self._last_edit_time = self._clock()
            self._last_sent_text = self._pending_text
            text = self._pending_text + self.marker
            try:
                await self._edit(text)
            except Exception as e:
                logger.warning(f"Progress edit failed, continuing stream: {e}")
