"""Shared pytest fixtures for mdbook-template tests.

Fixtures are organized by category:
- Logging fixtures: Reset package logging between tests
- Data fixtures: JSON context sources written to temporary directories
- Book fixtures: Host payload pieces for pipeline and CLI tests
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from mdbook_template.utils.logging import LOGGER_NAME
from tests.fixtures import make_book, make_chapter

# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_package_logging() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees package records."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Data Fixtures
# =============================================================================


@pytest.fixture
def write_json(tmp_path: Path):
    """Return a helper that writes text to a file under tmp_path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# =============================================================================
# Book Fixtures
# =============================================================================


@pytest.fixture
def nested_book() -> dict[str, Any]:
    """Return a book with a separator, a part title and nested chapters."""
    return make_book(
        {"PartTitle": "Guide"},
        make_chapter(
            "Intro",
            "Welcome to {{ product }}.",
            sub_items=[make_chapter("Setup", "Primary: {{ operators.primary }}")],
        ),
        "Separator",
        make_chapter("Plain", "No templates here.\r\n"),
    )
