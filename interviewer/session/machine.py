"""Interview session state machine.

Owns the turn list, drives chat requests, applies decoded stream events to the
in-progress assistant turn and sequences the finish/cooldown transition:

    IDLE -> AWAITING_RESPONSE -> STREAMING -> FINISHING -> IDLE

Transport failures return AWAITING_RESPONSE/STREAMING to IDLE directly.
"""

import asyncio
from typing import Callable, Protocol

from ..client import IChatTransport
from ..config import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_LANGUAGE,
    FINISH_COUNTDOWN_SECONDS,
)
from ..cooldown import ICooldownStore
from ..logging_config import get_logger
from ..models import SessionState, StreamEvent, StreamEventType, Turn
from ..stream import SentinelProcessor, decode_stream

logger = get_logger(__name__)

SessionListener = Callable[["InterviewSession"], None]


class IInterviewSession(Protocol):
    """Operations available to the presentation layer."""

    async def submit(self, text: str | None = None) -> bool:
        """Send a user turn and stream the reply. False if rejected."""
        ...

    def finish_now(self) -> bool:
        """Enter Finishing immediately. False if not allowed."""
        ...

    def reset(self) -> None:
        """Discard the session without recording cooldown."""
        ...


class InterviewSession:
    """Single-session interview state machine."""

    def __init__(
        self,
        transport: IChatTransport,
        cooldown_store: ICooldownStore,
        language: str = DEFAULT_LANGUAGE,
        on_reset: Callable[[], None] | None = None,
        countdown_seconds: int = FINISH_COUNTDOWN_SECONDS,
        tick_interval: float = 1.0,
        error_message: str = DEFAULT_ERROR_MESSAGE,
        sentinel: SentinelProcessor | None = None,
    ):
        self._transport = transport
        self._cooldown = cooldown_store
        self._language = language
        self._on_reset = on_reset
        self._countdown_seconds = countdown_seconds
        self._tick_interval = tick_interval
        self._error_message = error_message
        self._sentinel = sentinel or SentinelProcessor()

        self._turns: list[Turn] = []
        self._state = SessionState.IDLE
        self._listeners: list[SessionListener] = []
        self.input_text = ""

        self.is_loading = False
        self.is_awaiting_first_byte = False
        self.is_streaming = False
        self.countdown: int | None = None

        # Cumulative text of the in-progress assistant turn
        self._content = ""
        self._finishing = False
        self._countdown_task: asyncio.Task | None = None
        # Bumped on every teardown so a draining stream never touches a new session
        self._generation = 0

    # Observation

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, value: str) -> None:
        self._language = value

    @property
    def turns(self) -> list[Turn]:
        return self._turns.copy()

    @property
    def has_user_turn(self) -> bool:
        return any(turn.role == "user" for turn in self._turns)

    def snapshot(self) -> dict:
        """State observed by the presentation layer."""
        return {
            "turns": [
                {
                    "role": turn.role,
                    "text": turn.text,
                    "created_at": turn.created_at.isoformat(),
                }
                for turn in self._turns
            ],
            "is_loading": self.is_loading,
            "countdown": self.countdown,
            "state": self._state.value,
        }

    def subscribe(self, listener: SessionListener) -> None:
        """Register a callback invoked after every state change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            try:
                listener(self)
            except Exception:
                logger.exception("Error in session listener")

    # Lifecycle

    def begin(self, welcome: str | None = None) -> None:
        """Start an interview, optionally opening with an assistant welcome turn."""
        if self._turns or not welcome:
            return
        self._turns.append(Turn(role="assistant", text=welcome))
        self._notify()

    async def submit(self, text: str | None = None) -> bool:
        """Send a user turn and stream the assistant reply to completion."""
        content = (text if isinstance(text, str) else self.input_text).strip()
        if not content:
            return False

        if self.is_loading or self._state != SessionState.IDLE or self._finishing:
            logger.debug("Submit ignored: session busy (state=%s)", self._state.value)
            return False

        status = await self._cooldown.query_cooldown()
        if status.active:
            logger.info("Submit ignored: on cooldown for %d ms", status.remaining_ms)
            return False

        # Re-check after the await; another submit may have started meanwhile
        if self.is_loading or self._state != SessionState.IDLE or self._finishing:
            return False

        user_turn = Turn(role="user", text=content)
        self._turns.append(user_turn)
        history = [turn.to_payload() for turn in self._turns]

        assistant_turn = Turn(role="assistant", finalized=False)
        self._turns.append(assistant_turn)

        self.input_text = ""
        self._content = ""
        self.is_loading = True
        self.is_awaiting_first_byte = True
        self._state = SessionState.AWAITING_RESPONSE
        self._notify()

        logger.info(
            "Submitting turn %d (language=%s)", len(history), self._language
        )
        await self._stream_reply(assistant_turn, history, self._generation)
        return True

    async def _stream_reply(
        self, turn: Turn, history: list[dict], generation: int
    ) -> None:
        try:
            async with self._transport.open_stream(history, self._language) as chunks:
                if generation != self._generation:
                    return
                self.is_loading = False
                self.is_streaming = True
                self._state = SessionState.STREAMING
                self._notify()

                async for event in decode_stream(chunks):
                    if generation == self._generation:
                        self._apply_event(turn, event)

        except asyncio.CancelledError:
            logger.info("Chat stream cancelled")
            if generation == self._generation:
                self._finalize_turn(turn)
            raise
        except Exception as e:
            logger.error("Chat stream failed: %s", e, exc_info=True)
            if generation == self._generation:
                self._fail_turn(turn)
        finally:
            if generation == self._generation:
                self.is_loading = False
                self.is_streaming = False
                self.is_awaiting_first_byte = False
                self._notify()

    def _apply_event(self, turn: Turn, event: StreamEvent) -> None:
        if event.type == StreamEventType.END:
            self._finalize_turn(turn)
            return

        self.is_awaiting_first_byte = False
        self._content += event.content

        result = self._sentinel.check_and_strip(self._content)
        if result.found:
            self._content = result.cleaned
            turn.text = result.cleaned
            if not self._finishing:
                logger.info("End-of-interview marker detected")
                self._start_finishing()
        else:
            turn.text = self._content
        self._notify()

    def _finalize_turn(self, turn: Turn) -> None:
        # The marker never reaches the transcript, whichever path detects it
        result = self._sentinel.check_and_strip(self._content)
        if result.found:
            self._content = result.cleaned
            turn.text = result.cleaned
            if not self._finishing:
                logger.info("End-of-interview marker found after stream end")
                self._start_finishing()

        turn.finalized = True
        if not self._finishing:
            self._state = SessionState.IDLE
        logger.debug("Assistant turn finalized (%d chars)", len(turn.text))

    def _fail_turn(self, turn: Turn) -> None:
        self._content = ""
        turn.text = self._error_message
        turn.finalized = True
        if not self._finishing:
            self._state = SessionState.IDLE

    # Finishing

    def finish_now(self) -> bool:
        """User-elected early finish; skips marker stripping."""
        if self._finishing:
            return False
        if self._state not in (SessionState.IDLE, SessionState.STREAMING):
            return False
        if not self.has_user_turn:
            return False

        logger.info("Interview finished early by user")
        self._start_finishing()
        self._notify()
        return True

    def _start_finishing(self) -> None:
        self._finishing = True
        self._state = SessionState.FINISHING
        self.countdown = self._countdown_seconds
        self._countdown_task = asyncio.create_task(
            self._run_countdown(self._generation)
        )

    async def _run_countdown(self, generation: int) -> None:
        try:
            while True:
                await asyncio.sleep(self._tick_interval)
                if generation != self._generation:
                    return
                if self.countdown is None or self.countdown <= 1:
                    break
                self.countdown -= 1
                self._notify()

            await self._complete(generation)

        except Exception as e:
            logger.error("Finish countdown error: %s", e, exc_info=True)

    async def _complete(self, generation: int) -> None:
        await self._cooldown.record_completion()
        if generation != self._generation:
            return

        self._countdown_task = None
        self._teardown()
        logger.info("Interview completed, session cleared")

        if self._on_reset:
            try:
                self._on_reset()
            except Exception:
                logger.exception("Error in on_reset callback")
        self._notify()

    # Reset

    def reset(self) -> None:
        """Abort from any state: discard turns and timers, no cooldown."""
        task, self._countdown_task = self._countdown_task, None
        if task and not task.done():
            task.cancel()

        self._teardown()
        logger.info("Session reset")
        self._notify()

    async def close(self) -> None:
        """Cancel and await the countdown timer (owner teardown)."""
        task, self._countdown_task = self._countdown_task, None
        if task and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _teardown(self) -> None:
        self._generation += 1
        self._turns.clear()
        self._content = ""
        self.input_text = ""
        self._finishing = False
        self.countdown = None
        self.is_loading = False
        self.is_streaming = False
        self.is_awaiting_first_byte = False
        self._state = SessionState.IDLE
