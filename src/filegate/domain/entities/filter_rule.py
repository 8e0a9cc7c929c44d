"""Filter rule entity.

A filter rule attaches a glob-style expression to a storage source. The rule's
mode decides what happens to entries the expression matches: they are hidden
from listings, refused on access, or refused for download.
"""

from dataclasses import dataclass, replace
from enum import Enum


class FilterMode(str, Enum):
    """What a matching filter rule does to a file or folder."""

    HIDDEN = "hidden"
    INACCESSIBLE = "inaccessible"
    DISABLE_DOWNLOAD = "disable_download"


@dataclass
class FilterRule:
    """Filter rule entity.

    Rules of a storage source are evaluated in storage order, which is the
    order of their IDs; the first matching rule wins.

    Attributes:
        id: Auto-assigned ID, None until persisted.
        storage_id: ID of the owning storage source, None until saved.
        expression: Glob-style expression. Empty or None makes the rule inert.
        mode: Which decision the rule takes part in.
        description: Free-text label with no behavioral effect.
    """

    expression: str | None
    mode: FilterMode = FilterMode.HIDDEN
    description: str | None = None
    id: int | None = None
    storage_id: int | None = None

    def __post_init__(self) -> None:
        """Validate filter rule after initialization."""
        if not isinstance(self.mode, FilterMode):
            try:
                self.mode = FilterMode(self.mode)
            except ValueError as e:
                raise ValueError(f"Unknown filter mode: {self.mode!r}") from e
        if self.expression is not None and not isinstance(self.expression, str):
            raise ValueError("expression must be None or a string")

    @property
    def is_inert(self) -> bool:
        """Whether the rule has no expression and therefore never matches."""
        return not self.expression

    def copy_for(self, storage_id: int) -> "FilterRule":
        """Return an unsaved copy of this rule owned by another storage source."""
        return replace(self, id=None, storage_id=storage_id)
