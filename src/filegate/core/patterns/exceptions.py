"""Exceptions for glob pattern compilation and matching."""


class PatternError(Exception):
    """Base class for all pattern-related errors."""
    pass


class GlobSyntaxError(PatternError):
    """Raised when a glob expression is malformed."""
    def __init__(self, message: str, pattern: str, position: int | None = None):
        self.pattern = pattern
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"{message}{where} in glob '{pattern}'")
