"""SQLAlchemy model for the storage_sources table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from filegate.infrastructure.persistence.database import Base


class StorageSourceModel(Base):
    """SQLAlchemy model for the storage_sources table.

    Attributes:
        id: Auto-incrementing primary key.
        name: Display name.
        key: Unique URL-safe identifier.
        type: Storage backend type (StorageType value).
        enable: Whether the storage source is visible to users.
        order_num: Sort position among storage sources.
        created_at: Timestamp when the storage source was created.
    """

    __tablename__ = "storage_sources"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Storage source display name",
    )
    key: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="Unique storage source key",
    )
    type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Storage backend type",
    )
    enable: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    order_num: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<StorageSource(id={self.id}, key={self.key}, type={self.type})>"
