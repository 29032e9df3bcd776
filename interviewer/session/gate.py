"""Page-level cooldown gate with a cancellable 1-second poll."""

import asyncio

from ..cooldown import ICooldownStore, format_duration
from ..logging_config import get_logger
from ..models import CooldownStatus, DurationParts

logger = get_logger(__name__)


class CooldownGate:
    """Polls the cooldown store and decides whether an interview may start."""

    def __init__(self, store: ICooldownStore, interval: float = 1.0):
        self._store = store
        self._interval = interval
        self._status = CooldownStatus(active=False, remaining_ms=0)
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return self._status.active

    @property
    def remaining_ms(self) -> int | None:
        """Remaining cooldown, or None when not on cooldown."""
        return self._status.remaining_ms if self._status.active else None

    @property
    def remaining(self) -> DurationParts | None:
        if not self._status.active:
            return None
        return format_duration(self._status.remaining_ms)

    async def refresh(self) -> CooldownStatus:
        """Query the store once and cache the result."""
        self._status = await self._store.query_cooldown()
        return self._status

    async def can_start(self) -> bool:
        """True when a new interview is allowed right now."""
        status = await self.refresh()
        return not status.active

    async def start(self) -> None:
        """Check once immediately, then poll every interval."""
        if self._task:
            return
        await self.refresh()
        self._task = asyncio.create_task(self._poll())

    async def stop(self) -> None:
        """Cancel the poll timer."""
        task, self._task = self._task, None
        if task:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _poll(self) -> None:
        while True:
            try:
                await asyncio.sleep(self._interval)
                was_active = self._status.active
                await self.refresh()
                if was_active and not self._status.active:
                    logger.info("Cooldown expired, interviews available again")
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error("Cooldown poll error: %s", e, exc_info=True)
