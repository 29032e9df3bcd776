"""SQLite-backed cooldown store.

The cooldown gate is a client-side courtesy: any storage failure degrades to
"no cooldown" instead of raising.
"""

import time
from pathlib import Path
from typing import Callable, Protocol

import aiosqlite

from ..config import COOLDOWN_DURATION_MS, COOLDOWN_KEY, resolve_db_path
from ..logging_config import get_logger
from ..models import CooldownStatus, DurationParts

logger = get_logger(__name__)

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def format_duration(ms: int) -> DurationParts:
    """Decompose a non-negative millisecond count into days/hours/minutes/seconds."""
    total_seconds = ms // 1000
    days = total_seconds // (24 * 60 * 60)
    hours = (total_seconds % (24 * 60 * 60)) // (60 * 60)
    minutes = (total_seconds % (60 * 60)) // 60
    seconds = total_seconds % 60
    return DurationParts(days=days, hours=hours, minutes=minutes, seconds=seconds)


class ICooldownStore(Protocol):
    """Persists the last session completion and answers cooldown queries."""

    async def record_completion(self) -> None:
        """Write the current timestamp as the cooldown record."""
        ...

    async def query_cooldown(self) -> CooldownStatus:
        """Report whether a new session is blocked and for how long."""
        ...

    async def clear(self) -> None:
        """Remove the cooldown record."""
        ...


class CooldownStore:
    """Cooldown record kept in a SQLite key/value table."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        duration_ms: int = COOLDOWN_DURATION_MS,
        clock: Clock = now_ms,
    ):
        self._db_path = resolve_db_path(db_path)
        self._duration_ms = duration_ms
        self._clock = clock
        self._conn: aiosqlite.Connection | None = None

    @property
    def available(self) -> bool:
        return self._conn is not None

    async def init(self) -> None:
        """Open the database and create the state table.

        Failure leaves the store unavailable (fail-open) rather than raising.
        """
        try:
            if self._db_path != ":memory:":
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(self._db_path)

            schema_path = Path(__file__).parent / "schema.sql"
            with open(schema_path, "r", encoding="utf-8") as f:
                schema_sql = f.read()
            await self._conn.executescript(schema_sql)
            await self._conn.commit()
        except (OSError, aiosqlite.Error) as e:
            logger.warning("Cooldown storage unavailable (%s): %s", self._db_path, e)
            await self.close()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            conn, self._conn = self._conn, None
            try:
                await conn.close()
            except aiosqlite.Error as e:
                logger.warning("Error closing cooldown storage: %s", e)

    async def record_completion(self) -> None:
        """Write the current timestamp as the cooldown record."""
        if not self._conn:
            logger.warning("Cooldown storage unavailable, completion not recorded")
            return

        timestamp = self._clock()
        try:
            await self._conn.execute(
                """
                INSERT OR REPLACE INTO client_state (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                """,
                (COOLDOWN_KEY, str(timestamp)),
            )
            await self._conn.commit()
        except aiosqlite.Error as e:
            logger.warning("Failed to record interview completion: %s", e)
            return

        logger.info("Interview completion recorded at %d", timestamp)

    async def get_recorded_at(self) -> int | None:
        """Read the raw cooldown timestamp, or None when absent."""
        if not self._conn:
            return None

        try:
            cursor = await self._conn.execute(
                "SELECT value FROM client_state WHERE key = ?",
                (COOLDOWN_KEY,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.warning("Failed to read cooldown record: %s", e)
            return None

        if not row:
            return None

        try:
            return int(row[0])
        except (TypeError, ValueError):
            logger.warning("Ignoring unparseable cooldown record: %r", row[0])
            return None

    async def query_cooldown(self) -> CooldownStatus:
        """Report whether a new session is blocked and for how long."""
        recorded_at = await self.get_recorded_at()
        if recorded_at is None:
            return CooldownStatus(active=False, remaining_ms=0)

        elapsed = self._clock() - recorded_at
        return CooldownStatus(
            active=elapsed < self._duration_ms,
            remaining_ms=max(0, self._duration_ms - elapsed),
        )

    async def clear(self) -> None:
        """Remove the cooldown record."""
        if not self._conn:
            return

        try:
            await self._conn.execute(
                "DELETE FROM client_state WHERE key = ?", (COOLDOWN_KEY,)
            )
            await self._conn.commit()
        except aiosqlite.Error as e:
            logger.warning("Failed to clear cooldown record: %s", e)
