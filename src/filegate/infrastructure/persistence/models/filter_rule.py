"""SQLAlchemy model for the filter_rules table.

Filter rules store the glob expressions that hide, lock, or block downloads of
entries in a storage source.
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from filegate.infrastructure.persistence.database import Base


class FilterRuleModel(Base):
    """SQLAlchemy model for the filter_rules table.

    Rules are evaluated in ID order, so the autoincrement primary key doubles
    as the evaluation order.

    Attributes:
        id: Auto-incrementing primary key.
        storage_id: Foreign key to storage_sources table.
        expression: Glob expression (NULL or empty = inert rule).
        mode: FilterMode value (hidden, inaccessible, disable_download).
        description: Free-text label.
    """

    __tablename__ = "filter_rules"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    storage_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("storage_sources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to storage_sources table",
    )
    expression: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Glob expression matched against names and paths",
    )
    mode: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="hidden",
        index=True,
        comment="Filter mode: hidden, inaccessible, disable_download",
    )
    description: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Free-text description",
    )

    def __repr__(self) -> str:
        return (
            f"<FilterRule(id={self.id}, storage_id={self.storage_id}, "
            f"mode={self.mode}, expression={self.expression!r})>"
        )
