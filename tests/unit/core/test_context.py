"""Unit tests for the request context."""

from filegate.core.context import (
    RequestContext,
    get_current_context,
    request_context,
    set_current_context,
)


def test_no_context_by_default():
    assert get_current_context() is None


def test_request_context_restores_previous():
    set_current_context(RequestContext(user_id="outer"))

    with request_context("inner", username="alice") as context:
        assert get_current_context() is context
        assert context.user_id == "inner"
        assert context.username == "alice"

    assert get_current_context().user_id == "outer"


def test_anonymous_context():
    assert RequestContext().is_anonymous is True
    assert RequestContext(user_id="u1").is_anonymous is False
