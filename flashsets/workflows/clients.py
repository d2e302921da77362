"""
Async boundary between the save workflow and the blocking services.

The workflow only awaits these protocols. The threaded adapters run the
requests and SQLAlchemy based services in a worker thread so the event loop
that drives the workflow is never blocked.
"""

import asyncio
from collections.abc import Sequence
from typing import Any, Protocol

from flashsets.services.collection_store import CollectionService, CreateResult
from flashsets.services.naming import NamingServiceClient


class NamingClient(Protocol):
    async def suggest_name(self, items: Sequence[Any]) -> str: ...


class ExistenceChecker(Protocol):
    async def exists(self, owner_identity: str, normalized_name: str) -> bool: ...


class PersistenceClient(Protocol):
    async def create_collection(
        self, owner_identity: str, normalized_name: str, items: Sequence[Any]
    ) -> CreateResult: ...


class ThreadedNamingClient:
    """NamingClient backed by the HTTP naming service."""

    def __init__(self, client: NamingServiceClient) -> None:
        self.client = client

    async def suggest_name(self, items: Sequence[Any]) -> str:
        return await asyncio.to_thread(self.client.suggest_name, items)


class ThreadedCollectionStore:
    """ExistenceChecker and PersistenceClient backed by the collection database."""

    def __init__(self, service: CollectionService) -> None:
        self.service = service

    async def exists(self, owner_identity: str, normalized_name: str) -> bool:
        return await asyncio.to_thread(
            self.service.collection_exists, owner_identity, normalized_name
        )

    async def create_collection(
        self, owner_identity: str, normalized_name: str, items: Sequence[Any]
    ) -> CreateResult:
        return await asyncio.to_thread(
            self.service.create_collection, owner_identity, normalized_name, items
        )
