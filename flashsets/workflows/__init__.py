"""
Workflow layer for flashsets.
High-level user-driven processes that orchestrate multiple services.
"""

from collections.abc import Callable, Sequence
from typing import Any

from flashsets.services import collection_service, naming_client
from flashsets.workflows.clients import ThreadedCollectionStore, ThreadedNamingClient
from flashsets.workflows.collection_save import (
    CollectionSaveWorkflow,
    FailureReason,
    WorkflowPhase,
    WorkflowSnapshot,
)


def create_save_workflow(
    items: Sequence[Any],
    owner_identity: str,
    on_complete: Callable[[str], None] | None = None,
) -> CollectionSaveWorkflow:
    """Create a save workflow wired to the configured naming service and store."""
    store = ThreadedCollectionStore(collection_service)
    return CollectionSaveWorkflow(
        items=items,
        owner_identity=owner_identity,
        naming=ThreadedNamingClient(naming_client),
        checker=store,
        persistence=store,
        on_complete=on_complete,
    )


__all__ = [
    "create_save_workflow",
    "CollectionSaveWorkflow",
    "FailureReason",
    "WorkflowPhase",
    "WorkflowSnapshot",
]
