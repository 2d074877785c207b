"""Pytest fixtures for fuzzbox tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from fuzzbox.config import reset_config


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def games() -> list[dict[str, Any]]:
    """Small game library with flat fields."""
    return [
        {
            "title": "The Witcher 3",
            "genres": ["rpg", "action"],
            "release_year": 2015,
            "completed": True,
        },
        {
            "title": "Elden Ring",
            "genres": ["rpg", "action"],
            "release_year": 2022,
            "completed": False,
        },
        {
            "title": "Zelda: Breath of the Wild",
            "genres": ["adventure", "action"],
            "release_year": 2017,
            "completed": True,
        },
    ]


@pytest.fixture
def people() -> list[dict[str, Any]]:
    """People records, some with nested company data."""
    return [
        {
            "first_name": "Alice",
            "last_name": "Johnson",
            "email": "alice@acme.com",
            "company": {"name": "Acme", "location": {"city": "Berlin"}},
        },
        {
            "first_name": "Bob",
            "last_name": "Smith",
            "email": "bob@globex.com",
            "company": {"name": "Globex"},
        },
    ]


@pytest.fixture
def completed_handler() -> Any:
    """Keyword handler keeping completed games."""

    def handler(items: list[dict[str, Any]], terms: list[str]) -> list[dict[str, Any]]:
        return [item for item in items if item["completed"]]

    return handler


@pytest.fixture(autouse=True)
def reset_config_fixture() -> Generator[None, None, None]:
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_logging_fixture() -> Generator[None, None, None]:
    """Undo setup_logging changes to the package logger."""
    package_logger = logging.getLogger("fuzzbox")
    yield
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
