"""Shared test fixtures for consolidated book tests."""

import sys
from pathlib import Path

import pytest

# Ensure src is on the path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from consolidated_book.book.view import BookView  # noqa: E402
from consolidated_book.config.settings import Settings  # noqa: E402
from consolidated_book.models.level import MarketPrices  # noqa: E402
from factories import RecordingDisplay  # noqa: E402


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def prices(settings) -> MarketPrices:
    return settings.market_prices()


@pytest.fixture
def book(settings):
    return BookView(settings)


@pytest.fixture
def display():
    return RecordingDisplay()
