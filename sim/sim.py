"""SIM implementation - scripted candidate for end-to-end interview runs."""

import asyncio
import random
from typing import Protocol

from interviewer.logging_config import get_logger
from interviewer.models import SessionState
from interviewer.session import InterviewSession

logger = get_logger(__name__)

DEFAULT_ANSWERS = [
    "Hi, I'm a backend engineer with five years of Python experience.",
    "Mostly FastAPI services with PostgreSQL and Redis, deployed on Kubernetes.",
    "I'd profile first, then add caching and move slow work to a task queue.",
    "I write tests alongside the code and keep the CI pipeline under ten minutes.",
    "Thanks, I don't have more questions.",
]


class ISim(Protocol):
    """Drive an interview with scripted candidate answers."""

    async def start(self) -> None:
        """Start scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


class Sim:
    """Scripted candidate that answers until the interviewer ends the interview."""

    def __init__(
        self,
        session: InterviewSession,
        answers: list[str] | None = None,
        delay: tuple[float, float] = (1.0, 3.0),
        finish_when_exhausted: bool = True,
    ):
        self._session = session
        self._answers = list(answers) if answers is not None else list(DEFAULT_ANSWERS)
        self._delay = delay
        self._finish_when_exhausted = finish_when_exhausted
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def start(self) -> None:
        """Start scripted scenario."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    async def wait(self) -> None:
        """Wait for the scenario to finish on its own."""
        if self._task:
            await self._task

    async def _run_scenario(self) -> None:
        """Send answers one by one with a think-time pause between them."""
        try:
            for answer in self._answers:
                if not self._running:
                    break

                accepted = await self._session.submit(answer)
                logger.info("SIM: candidate -> %s (accepted=%s)", answer, accepted)
                self._log_reply()

                if self._session.state == SessionState.FINISHING:
                    logger.info("SIM: interviewer ended the interview")
                    break

                await asyncio.sleep(random.uniform(*self._delay))
            else:
                if self._finish_when_exhausted and self._session.finish_now():
                    logger.info("SIM: answers exhausted, finishing early")

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False

    def _log_reply(self) -> None:
        turns = self._session.turns
        if turns and turns[-1].role == "assistant":
            logger.info("SIM: interviewer -> %s", turns[-1].text)
