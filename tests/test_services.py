"""Tests for flashsets service layer."""

from unittest.mock import Mock

import pytest
import requests
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from flashsets.errors import NamingServiceNotConfiguredError, TransientServiceError
from flashsets.services.collection_store import (
    DUPLICATE_NAME_REASON,
    CollectionService,
    CreateResult,
)
from flashsets.services.naming import NamingServiceClient


class TestCollectionService:
    """Test cases for CollectionService against a SQLite database."""

    def test_init(self, session_factory):
        """Test CollectionService initialization."""
        service = CollectionService(session_factory)
        assert service.Session == session_factory

    def test_create_collection(self, collection_store, sample_items):
        """Test creating a collection stores its items in order."""
        items = sample_items + [{"front": "Capital of Spain", "back": "Madrid"}]

        result = collection_store.create_collection("u1", "word capitals", items)

        assert result.success is True
        assert result.reason is None
        assert result.id
        assert collection_store.get_collection_items(result.id) == items

    def test_create_collection_normalizes_name(self, collection_store, sample_items):
        """Test the stored name is the normalized name."""
        collection_store.create_collection("u1", "  Word Capitals ", sample_items)

        collection = collection_store.get_collection("u1", "word capitals")
        assert collection is not None
        assert collection.name == "word capitals"
        assert collection.owner_identity == "u1"

    def test_create_duplicate_rejected(self, collection_store, sample_items):
        """Test the store itself rejects a second collection with the same name."""
        first = collection_store.create_collection("u1", "word capitals", sample_items)
        second = collection_store.create_collection(
            "u1", "Word Capitals", sample_items
        )

        assert first.success is True
        assert second == CreateResult(success=False, reason=DUPLICATE_NAME_REASON)
        assert len(collection_store.list_collections("u1")) == 1

    def test_same_name_other_owner(self, collection_store, sample_items):
        """Test names are only unique per owner."""
        first = collection_store.create_collection("u1", "word capitals", sample_items)
        second = collection_store.create_collection(
            "u2", "word capitals", sample_items
        )

        assert first.success is True
        assert second.success is True
        assert first.id != second.id

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("word capitals", True),
            ("Word Capitals", True),
            ("  WORD CAPITALS  ", True),
            ("word capital", False),
        ],
    )
    def test_collection_exists(self, collection_store, sample_items, query, expected):
        """Test existence checks agree across differently-cased input."""
        collection_store.create_collection("u1", "word capitals", sample_items)

        assert collection_store.collection_exists("u1", query) is expected

    def test_collection_exists_other_owner(self, collection_store, sample_items):
        """Test a collection of another owner does not count."""
        collection_store.create_collection("u1", "word capitals", sample_items)

        assert collection_store.collection_exists("u2", "word capitals") is False

    def test_list_collections(self, collection_store, sample_items):
        """Test listing returns only the owner's collections."""
        collection_store.create_collection("u1", "first", sample_items)
        collection_store.create_collection("u1", "second", sample_items)
        collection_store.create_collection("u2", "other", sample_items)

        names = [c.name for c in collection_store.list_collections("u1")]

        assert sorted(names) == ["first", "second"]

    def test_get_collection_not_found(self, collection_store):
        """Test a missing collection returns None."""
        assert collection_store.get_collection("u1", "missing") is None

    def test_delete_collection(self, collection_store, sample_items):
        """Test deleting removes the collection and its items."""
        result = collection_store.create_collection("u1", "word capitals", sample_items)

        assert collection_store.delete_collection("u1", "Word Capitals") is True

        assert collection_store.collection_exists("u1", "word capitals") is False
        assert collection_store.get_collection_items(result.id) == []

    def test_delete_collection_not_found(self, collection_store):
        """Test deleting a missing collection returns False."""
        assert collection_store.delete_collection("u1", "missing") is False

    def test_name_reusable_after_delete(self, collection_store, sample_items):
        """Test a deleted name can be saved again."""
        collection_store.create_collection("u1", "word capitals", sample_items)
        collection_store.delete_collection("u1", "word capitals")

        result = collection_store.create_collection("u1", "word capitals", sample_items)

        assert result.success is True

    def test_database_error_is_transient(self):
        """Test infrastructure errors surface as TransientServiceError."""
        mock_session = Mock(spec=Session)
        mock_session.scalars.side_effect = OperationalError("SELECT", {}, Exception())
        mock_sessionmaker = Mock(spec=sessionmaker)
        mock_sessionmaker.return_value.__enter__ = Mock(return_value=mock_session)
        mock_sessionmaker.return_value.__exit__ = Mock(return_value=None)
        service = CollectionService(mock_sessionmaker)

        with pytest.raises(TransientServiceError) as exc_info:
            service.collection_exists("u1", "word capitals")

        assert exc_info.value.service == "collection store"


class TestNamingServiceClient:
    """Test cases for NamingServiceClient."""

    @pytest.fixture
    def http(self):
        """Mock requests session."""
        return Mock(spec=requests.Session)

    @pytest.fixture
    def client(self, http):
        return NamingServiceClient("https://names.example.com/suggest", session=http)

    def _response(self, payload=None, status_error=None, json_error=None):
        response = Mock()
        if status_error:
            response.raise_for_status.side_effect = status_error
        if json_error:
            response.json.side_effect = json_error
        else:
            response.json.return_value = payload
        return response

    def test_suggest_name(self, client, http, sample_items):
        """Test the items are posted and the name is returned."""
        http.post.return_value = self._response({"name": "Word Capitals"})

        assert client.suggest_name(sample_items) == "Word Capitals"

        http.post.assert_called_once_with(
            "https://names.example.com/suggest",
            json={"items": sample_items},
            timeout=30,
        )

    def test_suggest_name_strips_whitespace(self, client, http, sample_items):
        """Test the suggested name is trimmed."""
        http.post.return_value = self._response({"name": "  Word Capitals\n"})

        assert client.suggest_name(sample_items) == "Word Capitals"

    def test_not_configured(self, sample_items):
        """Test a missing endpoint raises without any request."""
        http = Mock(spec=requests.Session)
        client = NamingServiceClient(None, session=http)

        with pytest.raises(NamingServiceNotConfiguredError):
            client.suggest_name(sample_items)

        http.post.assert_not_called()

    @pytest.mark.parametrize(
        "exception",
        [
            requests.ConnectionError("refused"),
            requests.Timeout("timed out"),
        ],
    )
    def test_request_errors_are_transient(self, client, http, sample_items, exception):
        """Test network failures raise TransientServiceError."""
        http.post.side_effect = exception

        with pytest.raises(TransientServiceError):
            client.suggest_name(sample_items)

    def test_http_error_is_transient(self, client, http, sample_items):
        """Test non-2xx statuses raise TransientServiceError."""
        http.post.return_value = self._response(
            status_error=requests.HTTPError("503 Service Unavailable")
        )

        with pytest.raises(TransientServiceError) as exc_info:
            client.suggest_name(sample_items)

        assert "503" in str(exc_info.value)

    def test_invalid_json_is_transient(self, client, http, sample_items):
        """Test a non-JSON body raises TransientServiceError."""
        http.post.return_value = self._response(json_error=ValueError("bad json"))

        with pytest.raises(TransientServiceError) as exc_info:
            client.suggest_name(sample_items)

        assert "not JSON" in str(exc_info.value)

    @pytest.mark.parametrize(
        "payload",
        [{}, {"name": ""}, {"name": "   "}, {"name": 42}, ["Word Capitals"]],
    )
    def test_missing_name_is_transient(self, client, http, sample_items, payload):
        """Test a reply without a usable name raises TransientServiceError."""
        http.post.return_value = self._response(payload)

        with pytest.raises(TransientServiceError):
            client.suggest_name(sample_items)
