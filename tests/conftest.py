"""Pytest configuration and shared fixtures for flashsets tests."""

from datetime import datetime
from unittest.mock import AsyncMock, Mock, patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from flashsets.config import LOGGER
from flashsets.models import register_models
from flashsets.models.base import Base
from flashsets.models.collection import Collection
from flashsets.services.collection_store import CollectionService, CreateResult

SAMPLE_ITEMS = [{"front": "Capital of France", "back": "Paris"}]


@pytest.fixture
def mock_db():
    """Mock database initialization."""
    with patch("flashsets.db.initialize_database", return_value=True):
        yield


@pytest.fixture
def mock_logger():
    """Mock logger to capture log messages."""
    with (
        patch.object(LOGGER, "info") as mock_info,
        patch.object(LOGGER, "error") as mock_error,
        patch.object(LOGGER, "warning") as mock_warning,
    ):
        yield {
            "info": mock_info,
            "error": mock_error,
            "warning": mock_warning,
        }


@pytest.fixture
def sample_items():
    """A one-card item set."""
    return [dict(item) for item in SAMPLE_ITEMS]


@pytest.fixture
def items_file(tmp_path):
    """Write the sample items to a YAML file."""
    path = tmp_path / "cards.yaml"
    path.write_text(
        "flashcards:\n  - front: Capital of France\n    back: Paris\n"
    )
    return path


@pytest.fixture
def session_factory(tmp_path):
    """Sessionmaker bound to a fresh SQLite database file."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    register_models()
    Base.metadata.create_all(engine)
    yield sessionmaker(engine)
    engine.dispose()


@pytest.fixture
def collection_store(session_factory):
    """CollectionService backed by a real SQLite database."""
    return CollectionService(session_factory)


@pytest.fixture
def naming():
    """Async naming client double."""
    client = Mock()
    client.suggest_name = AsyncMock(return_value="Word Capitals")
    return client


@pytest.fixture
def checker():
    """Async existence checker double reporting no existing collection."""
    client = Mock()
    client.exists = AsyncMock(return_value=False)
    return client


@pytest.fixture
def persistence():
    """Async persistence client double that always succeeds."""
    client = Mock()
    client.create_collection = AsyncMock(
        return_value=CreateResult(success=True, id="c123")
    )
    return client


@pytest.fixture
def mock_collection_service():
    """Mock the shared collection service used by the CLI commands."""
    with patch(
        "flashsets.cli.commands.collection.collection_service"
    ) as mock_service:
        sample = Collection(
            id="c123",
            owner_identity="u1",
            name="word capitals",
            created_at=datetime(2024, 1, 1, 12, 0, 0),
        )
        mock_service.list_collections.return_value = [sample]
        mock_service.get_collection.return_value = sample
        mock_service.get_collection_items.return_value = list(SAMPLE_ITEMS)
        mock_service.delete_collection.return_value = True
        yield mock_service


@pytest.fixture(autouse=True)
def capture_exits():
    """Capture system exits to prevent tests from actually exiting."""
    with patch("builtins.exit") as mock_exit, patch("sys.exit"):
        yield mock_exit
