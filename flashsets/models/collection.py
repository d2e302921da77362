import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Collection(Base):
    """
    Represents a named set of items saved by one owner.
    The name column always holds the normalized name.
    """

    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=lambda: uuid.uuid4().hex
    )
    owner_identity: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    items: Mapped[list["CollectionItem"]] = relationship(
        "CollectionItem",
        back_populates="collection",
        cascade="all, delete-orphan",
        order_by="CollectionItem.position",
    )

    # Names are unique per owner, never globally
    __table_args__ = (
        UniqueConstraint("owner_identity", "name", name="uq_collection_owner_name"),
    )


class CollectionItem(Base):
    """
    Represents one item of a collection, stored as an opaque JSON payload.
    Position preserves the order the items were supplied in.
    """

    __tablename__ = "collection_items"

    id: Mapped[int] = mapped_column(Integer(), nullable=False, primary_key=True)
    collection_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("collections.id"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer(), nullable=False)
    payload: Mapped[Any] = mapped_column(JSON(), nullable=False)

    collection: Mapped["Collection"] = relationship(
        "Collection", back_populates="items"
    )
