"""SQLAlchemy model for the user_storage_sources table.

Grants a user access to a storage source together with the operations the
user may perform on it.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from filegate.infrastructure.persistence.database import Base


class UserStorageSourceModel(Base):
    """SQLAlchemy model for the user_storage_sources table.

    Attributes:
        id: Auto-incrementing primary key.
        user_id: ID of the user (UUID string).
        storage_id: Foreign key to storage_sources table.
        enable: Whether the grant is active.
        permissions: JSON array of FileOperatorType values.
    """

    __tablename__ = "user_storage_sources"
    __table_args__ = (
        UniqueConstraint("user_id", "storage_id", name="uq_user_storage_sources_user_storage"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="User ID",
    )
    storage_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("storage_sources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to storage_sources table",
    )
    enable: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    permissions: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="[]",
        comment="Granted operations (JSON array of operator names)",
    )

    def __repr__(self) -> str:
        return f"<UserStorageSource(user_id={self.user_id}, storage_id={self.storage_id})>"
