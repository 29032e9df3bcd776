"""Client application bootstrap and lifecycle management."""

from typing import Callable, Protocol

from .client import ChatClient, IChatTransport
from .config import Settings
from .cooldown import CooldownStore
from .locale import resolve_language
from .logging_config import get_logger
from .session import CooldownGate, InterviewSession

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...


class Application:
    """Wires the cooldown store, gate, transport and interview session."""

    def __init__(
        self,
        settings: Settings | None = None,
        db_path: str | None = None,
        transport: IChatTransport | None = None,
        on_reset: Callable[[], None] | None = None,
    ):
        self._settings = settings or Settings.from_env()
        self._db_path = db_path if db_path is not None else self._settings.database_url
        self._external_transport = transport
        self._on_reset = on_reset

        # Components (will be initialized in start())
        self._store: CooldownStore | None = None
        self._gate: CooldownGate | None = None
        self._client: ChatClient | None = None
        self._session: InterviewSession | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Cooldown store (no dependencies)
        self._store = CooldownStore(self._db_path)
        await self._store.init()
        logger.info("Cooldown store initialized (available=%s)", self._store.available)

        # 2. Gate (depends on store)
        self._gate = CooldownGate(self._store)
        await self._gate.start()

        # 3. Transport
        transport = self._external_transport
        if transport is None:
            self._client = ChatClient(self._settings.api_url)
            transport = self._client

        # 4. Session (depends on transport + store)
        self._session = InterviewSession(
            transport=transport,
            cooldown_store=self._store,
            language=resolve_language(self._settings.locale),
            on_reset=self._on_reset,
        )
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._session:
            await self._session.close()
        if self._client:
            await self._client.close()
        if self._gate:
            await self._gate.stop()
        if self._store:
            await self._store.close()
            logger.info("Cooldown store closed")

    async def start_interview(self, welcome: str | None = None) -> bool:
        """Open a new interview unless the cooldown gate blocks it."""
        if not await self.gate.can_start():
            logger.info("Interview start blocked by cooldown")
            return False
        self.session.begin(welcome)
        return True

    def set_locale(self, locale: str) -> None:
        """Switch the reply language for subsequent turns."""
        self.session.language = resolve_language(locale)

    @property
    def store(self) -> CooldownStore:
        """Get cooldown store instance."""
        if not self._store:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def gate(self) -> CooldownGate:
        """Get cooldown gate instance."""
        if not self._gate:
            raise RuntimeError("Application not started")
        return self._gate

    @property
    def session(self) -> InterviewSession:
        """Get interview session instance."""
        if not self._session:
            raise RuntimeError("Application not started")
        return self._session
