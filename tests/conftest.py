"""Pytest configuration and fixtures for seatplan tests."""

import logging

import pytest

from seatplan import (
    EntityStore,
    LayoutConfig,
    MemoryBackend,
    Person,
    RankingEngine,
    SeatingSession,
    SelectionManager,
)

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@pytest.fixture
def config():
    """Default layout configuration (3200x2400, 100x150 seats)."""
    return LayoutConfig()


@pytest.fixture
def store(config):
    """Empty entity store."""
    return EntityStore(config)


@pytest.fixture
def selection(store):
    """Selection manager over the store fixture."""
    return SelectionManager(store)


@pytest.fixture
def ranking(store):
    """Ranking engine over the store fixture."""
    return RankingEngine(store)


@pytest.fixture
def session(config):
    """Seating session with in-memory snapshot storage."""
    return SeatingSession(config=config, backend=MemoryBackend())


@pytest.fixture
def people():
    """Three people with distinct rank scores, listed out of score order."""
    return [
        Person(id="p-low", name="Low", rank_score=10),
        Person(id="p-high", name="High", rank_score=90),
        Person(id="p-mid", name="Mid", rank_score=50),
    ]
