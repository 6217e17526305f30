"""Run the caching plugin server."""

import os

import uvicorn

from gqlcache.adapters.fastapi import create_app
from gqlcache.config import load_config
from gqlcache.logging_config import configure_logging

UVICORN_LEVELS = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARN": "warning",
    "WARNING": "warning",
    "ERROR": "error",
    "CRITICAL": "critical",
}


def main() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    app = create_app(load_config())
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8787")),
        log_level=UVICORN_LEVELS.get(log_level.upper(), "info"),
    )


if __name__ == "__main__":
    main()
