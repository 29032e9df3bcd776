"""Pytest configuration and fixtures."""

import asyncio
import json
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def sse(*contents: str) -> bytes:
    """Encode content fragments the way the chat endpoint frames them."""
    return b"".join(
        f"data: {json.dumps({'content': c}, ensure_ascii=False)}\n\n".encode("utf-8")
        for c in contents
    )


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeTransport:
    """In-memory chat transport yielding preset byte chunks."""

    def __init__(self, chunks: list[bytes] | None = None):
        self.chunks = list(chunks or [])
        self.open_error: Exception | None = None
        self.stream_error: Exception | None = None
        self.release: asyncio.Event | None = None
        self.requests: list[dict] = []

    @asynccontextmanager
    async def open_stream(self, messages, language):
        self.requests.append({"messages": messages, "language": language})
        if self.release is not None:
            await self.release.wait()
        if self.open_error is not None:
            raise self.open_error
        yield self._iter_chunks()

    async def _iter_chunks(self):
        for chunk in self.chunks:
            yield chunk
        if self.stream_error is not None:
            raise self.stream_error


@pytest.fixture
def clock():
    """Create a controllable clock."""
    return FakeClock()


@pytest_asyncio.fixture
async def store(clock):
    """Create in-memory cooldown store for testing."""
    from interviewer.cooldown import CooldownStore

    st = CooldownStore(":memory:", clock=clock)
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def transport():
    """Create fake chat transport."""
    return FakeTransport()


@pytest.fixture
def reset_calls():
    """Collects on_reset notifications."""
    return []


@pytest_asyncio.fixture
async def session(transport, store, reset_calls):
    """Create InterviewSession with a fast countdown ticker."""
    from interviewer.session import InterviewSession

    s = InterviewSession(
        transport=transport,
        cooldown_store=store,
        language="eng",
        on_reset=lambda: reset_calls.append(True),
        tick_interval=0.001,
        error_message="Request failed",
    )
    yield s
    await s.close()


@pytest.fixture
def wait_until():
    """Poll a predicate until it holds or the timeout expires."""

    async def _wait(predicate, timeout: float = 2.0) -> bool:
        deadline = asyncio.get_running_loop().time() + timeout
        while not predicate():
            if asyncio.get_running_loop().time() > deadline:
                return False
            await asyncio.sleep(0.002)
        return True

    return _wait
