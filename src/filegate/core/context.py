"""Request context management using ContextVars.

Stores the user on whose behalf the current task runs, so that services deep
in the call stack (such as the permission check inside the filter service)
can resolve it without explicit parameter passing.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class RequestContext:
    """Identity of the caller for the current request or command.

    Attributes:
        user_id: ID of the authenticated user, or None for anonymous access.
        username: Optional display name, used only for logging.
    """

    user_id: Optional[str] = None
    username: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


_current_request_context: ContextVar[Optional[RequestContext]] = ContextVar(
    "current_request_context", default=None
)


def get_current_context() -> Optional[RequestContext]:
    """Get the current request context.

    Returns:
        The current RequestContext or None if not set.
    """
    return _current_request_context.get()


def set_current_context(context: RequestContext) -> None:
    """Set the current request context."""
    _current_request_context.set(context)


def clear_current_context() -> None:
    """Clear the current request context."""
    _current_request_context.set(None)


@contextmanager
def request_context(user_id: Optional[str], username: Optional[str] = None) -> Iterator[RequestContext]:
    """Run a block on behalf of a user, restoring the previous context afterwards.

    Example:
        with request_context("user-1"):
            hidden = await filter_service.check_hidden(storage_id, "a.tmp")
    """
    context = RequestContext(user_id=user_id, username=username)
    token = _current_request_context.set(context)
    try:
        yield context
    finally:
        _current_request_context.reset(token)
