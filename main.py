"""Main entry point for the interview chat server."""

import uvicorn

from interviewer.api import create_fastapi_app
from interviewer.config import Settings
from interviewer.logging_config import setup_logging


def main():
    """Run the application."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    # Create FastAPI app
    app = create_fastapi_app(settings)

    # Run with uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
