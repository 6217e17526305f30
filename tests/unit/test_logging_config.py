"""Tests for logging setup."""

import logging
from collections.abc import Iterator

import pytest

from gqlcache.logging_config import configure_logging


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("gqlcache")
    handlers, level = list(logger.handlers), logger.level
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_sets_level_and_handler(package_logger: logging.Logger) -> None:
    configure_logging("debug")

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1


def test_is_idempotent(package_logger: logging.Logger) -> None:
    configure_logging("INFO")
    configure_logging("WARNING")

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info(package_logger: logging.Logger) -> None:
    configure_logging("chatty")

    assert package_logger.level == logging.INFO
