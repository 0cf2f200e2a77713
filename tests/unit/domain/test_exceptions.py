"""Tests for domain/exceptions.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from lineheat.domain.exceptions import (
    InvalidRequestError,
    LineheatError,
    MalformedSourceMapError,
    ToolIdUnavailableError,
    UnreadableFileError,
)


class TestExceptionHierarchy:
    """All public errors derive from LineheatError and a builtin."""

    @pytest.mark.parametrize(
        ("error", "builtin"),
        [
            (MalformedSourceMapError("bad"), ValueError),
            (UnreadableFileError(Path("x.map"), PermissionError("denied")), OSError),
            (InvalidRequestError("topN", "x", "must be an integer"), ValueError),
            (ToolIdUnavailableError(4), RuntimeError),
        ],
    )
    def test_inherits(self, error: Exception, builtin: type[Exception]) -> None:
        """except LineheatError and except <builtin> both catch it."""
        assert isinstance(error, LineheatError)
        assert isinstance(error, builtin)


class TestMessages:
    """Tests for exception attributes and messages."""

    def test_malformed_with_name(self) -> None:
        """Message is prefixed with the document name."""
        error = MalformedSourceMapError("invalid JSON", name="app.js")
        assert error.name == "app.js"
        assert error.reason == "invalid JSON"
        assert str(error) == "app.js: malformed source map: invalid JSON"

    def test_malformed_without_name(self) -> None:
        """No prefix when the name is unknown."""
        assert str(MalformedSourceMapError("x")) == "malformed source map: x"

    def test_unreadable_keeps_cause(self) -> None:
        """Underlying OSError is chained."""
        original = PermissionError("denied")
        error = UnreadableFileError(Path("x.map"), original)
        assert error.path == Path("x.map")
        assert error.__cause__ is original

    def test_invalid_request(self) -> None:
        """Parameter name and raw value are in the message."""
        error = InvalidRequestError("topN", "abc", "must be an integer")
        assert error.parameter == "topN"
        assert "topN='abc'" in str(error)

    def test_tool_id(self) -> None:
        """Tool id is kept."""
        assert ToolIdUnavailableError(4).tool_id == 4
