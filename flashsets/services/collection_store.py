from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from flashsets.config import LOGGER
from flashsets.errors import TransientServiceError
from flashsets.models.collection import Collection, CollectionItem
from flashsets.utils import normalize_name

DUPLICATE_NAME_REASON = "A collection with this name already exists."


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a create_collection call."""

    success: bool
    id: str | None = None
    reason: str | None = None


class CollectionService:
    """
    Service for storing named collections scoped to an owner.
    Uniqueness of (owner, normalized name) is enforced by the database.
    """

    def __init__(self, sessionmaker_: sessionmaker[Session]) -> None:
        self.Session: sessionmaker[Session] = sessionmaker_

    def collection_exists(self, owner_identity: str, name: str) -> bool:
        """Check whether the owner already has a collection with this name."""
        key = normalize_name(name)
        try:
            with self.Session() as session:
                found = session.scalars(
                    select(Collection.id).where(
                        Collection.owner_identity == owner_identity,
                        Collection.name == key,
                    )
                ).first()
        except SQLAlchemyError as e:
            raise TransientServiceError("collection store", str(e)) from e
        return found is not None

    def create_collection(
        self, owner_identity: str, name: str, items: Sequence[Any]
    ) -> CreateResult:
        """
        Create a collection with its items in a single transaction.
        A duplicate name for the owner is reported as an unsuccessful result,
        any other database failure is raised as TransientServiceError.
        """
        key = normalize_name(name)
        try:
            with self.Session.begin() as session:
                collection = Collection(owner_identity=owner_identity, name=key)
                collection.items = [
                    CollectionItem(position=position, payload=payload)
                    for position, payload in enumerate(items)
                ]
                session.add(collection)
                session.flush()  # Surface constraint violations before commit
                collection_id = collection.id
        except IntegrityError as e:
            LOGGER.warning(
                f"Rejected duplicate collection '{key}' for owner {owner_identity}"
            )
            LOGGER.debug(f"Integrity error: {e}")
            return CreateResult(success=False, reason=DUPLICATE_NAME_REASON)
        except SQLAlchemyError as e:
            raise TransientServiceError("collection store", str(e)) from e

        LOGGER.info(
            f"Created collection '{key}' ({collection_id}) with {len(items)} items"
        )
        return CreateResult(success=True, id=collection_id)

    def get_collection(self, owner_identity: str, name: str) -> Collection | None:
        """Get a collection by owner and name."""
        with self.Session() as session:
            return session.scalars(
                select(Collection).where(
                    Collection.owner_identity == owner_identity,
                    Collection.name == normalize_name(name),
                )
            ).first()

    def get_collection_items(self, collection_id: str) -> list[Any]:
        """Get the item payloads of a collection in their saved order."""
        with self.Session() as session:
            payloads = session.scalars(
                select(CollectionItem.payload)
                .where(CollectionItem.collection_id == collection_id)
                .order_by(CollectionItem.position)
            ).all()
            return list(payloads)

    def list_collections(self, owner_identity: str) -> list[Collection]:
        """Get all collections of an owner, oldest first."""
        with self.Session() as session:
            collections = session.scalars(
                select(Collection)
                .where(Collection.owner_identity == owner_identity)
                .order_by(Collection.created_at)
            ).all()
            session.expunge_all()
            return list(collections)

    def delete_collection(self, owner_identity: str, name: str) -> bool:
        """
        Delete a collection and its items.
        Returns True if successful, False if collection not found.
        """
        with self.Session.begin() as session:
            collection = session.scalars(
                select(Collection).where(
                    Collection.owner_identity == owner_identity,
                    Collection.name == normalize_name(name),
                )
            ).first()
            if not collection:
                return False

            # Cascades to CollectionItem
            session.delete(collection)
            return True
