"""Entry point for the Cleaning Service API.

Starts the FastAPI application with Uvicorn.  Intended to be executed
from the project root, for example under Docker where only a single
Python file is specified::

    python run.py

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``8000``).  All other settings are
described in ``cleaning_service_api/app/core/config.py``.
"""
import asyncio
import os

from uvicorn import Config, Server

from cleaning_service_api.app.core.config import settings
from cleaning_service_api.app.main import app


async def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    # log_config=None keeps the handlers installed by setup_logging().
    config = Config(
        app=app,
        host=host,
        port=port,
        reload=False,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
