"""Run a scripted interview against a running chat server.

    python -m sim
"""

import asyncio

from interviewer.app import Application
from interviewer.config import Settings
from interviewer.logging_config import setup_logging
from interviewer.models import SessionState

from .sim import Sim


async def run() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    app = Application(settings)
    await app.start()
    try:
        if not await app.start_interview():
            return
        sim = Sim(app.session)
        await sim.start()
        await sim.wait()
        # Let the finish countdown run out so the cooldown is recorded
        while app.session.state == SessionState.FINISHING:
            await asyncio.sleep(0.5)
    finally:
        await app.stop()


if __name__ == "__main__":
    asyncio.run(run())
