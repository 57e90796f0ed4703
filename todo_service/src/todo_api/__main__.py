"""
Run the service: `python -m todo_api`.

Builds the application from environment settings and serves it with uvicorn
on HOST:PORT. A storage failure during startup ends the process.
"""
from __future__ import annotations

import logging
import sys

import uvicorn

from .main import create_app
from .repositories import RepositoryError
from .settings import get_settings

logger = logging.getLogger("todo_api")


def main() -> None:
    settings = get_settings()
    try:
        app = create_app(settings)
    except RepositoryError as e:
        logger.critical("Database initialization failed: %s", e)
        print(f"Database initialization failed: {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        logger.critical("Startup failed: %s", e)
        print(f"Startup failed: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
