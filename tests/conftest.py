"""Pytest configuration and shared fixtures.

This module provides fixtures for testing quotebook, including a store
backed by a temporary file and sample quotes.
"""

import os
from pathlib import Path
from typing import Generator

import pytest

from quotebook.config import reset_config
from quotebook.quotes.manager import QuoteManager
from quotebook.quotes.schemas import Category, Quote
from quotebook.quotes.store import QuoteStore


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a database file that does not exist yet."""
    return tmp_path / "quotes.json"


@pytest.fixture
def store(db_path: Path) -> QuoteStore:
    """Create a store writing to a temporary file."""
    return QuoteStore(db_path)


@pytest.fixture
def manager(store: QuoteStore, sample_quotes: list[Quote]) -> QuoteManager:
    """Create a manager holding the sample quotes."""
    return QuoteManager(store, list(sample_quotes))


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def be_yourself() -> Quote:
    """A quote tagged wisdom."""
    return Quote(text="Be yourself", categories={Category.WISDOM})


@pytest.fixture
def carpe_diem() -> Quote:
    """A quote tagged motivation."""
    return Quote(text="Carpe diem", categories={Category.MOTIVATION})


@pytest.fixture
def sample_quotes(be_yourself: Quote, carpe_diem: Quote) -> list[Quote]:
    """Two quotes with distinct categories."""
    return [be_yourself, carpe_diem]


@pytest.fixture
def mixed_quotes() -> list[Quote]:
    """Unsorted quotes with overlapping categories and one untagged quote."""
    return [
        Quote(text="To be or not to be", categories={Category.LITERATURE, Category.PHILOSOPHY}),
        Quote(text="All you need is love", categories={Category.LOVE}),
        Quote(text="Know thyself", categories={Category.WISDOM, Category.PHILOSOPHY}),
        Quote(text="Untagged thought"),
        Quote(text="All you need is love", categories={Category.LOVE, Category.HAPPINESS}),
    ]


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_env(tmp_path: Path) -> Generator[Path, None, None]:
    """Point the CLI at a temporary database and export path."""
    reset_config()
    db_file = tmp_path / "cli" / "quotes.json"
    os.environ["QUOTEBOOK_DB_PATH"] = str(db_file)
    os.environ["QUOTEBOOK_EXPORT_PATH"] = str(tmp_path / "cli" / "export.csv")

    yield db_file

    reset_config()
    for key in ("QUOTEBOOK_DB_PATH", "QUOTEBOOK_EXPORT_PATH"):
        os.environ.pop(key, None)

