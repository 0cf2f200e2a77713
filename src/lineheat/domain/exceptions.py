"""Domain exceptions: all public errors of lineheat.

All exceptions visible to users are defined in domain.
Infrastructure/Application raise these, not their own public exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class LineheatError(Exception):
    """Base for all lineheat error exceptions.

    Allows: except LineheatError to catch all library errors.
    """


class MalformedSourceMapError(LineheatError, ValueError):
    """Source-map document cannot be decoded.

    Recoverable and file-scoped: the loader skips the file and continues.

    Attributes:
        name: Map file or table name (may be empty when unknown).
        reason: Why the document was rejected.
    """

    def __init__(self, reason: str, *, name: str = "") -> None:
        """Initialize with reason and optional document name."""
        self.name = name
        self.reason = reason
        prefix = f"{name}: " if name else ""
        super().__init__(f"{prefix}malformed source map: {reason}")


class UnreadableFileError(LineheatError, OSError):
    """File or directory could not be read during source-map discovery.

    Attributes:
        path: Path that failed.
    """

    def __init__(self, path: Path, original: OSError) -> None:
        """Initialize with failing path and the underlying OSError."""
        self.path = path
        super().__init__(f"cannot read {path}: {original}")
        self.__cause__ = original


class InvalidRequestError(LineheatError, ValueError):
    """Malformed query parameter at the transport boundary.

    Attributes:
        parameter: Parameter name.
        value: Raw value received.
    """

    def __init__(self, parameter: str, value: object, reason: str) -> None:
        """Initialize with parameter name, raw value and reason."""
        self.parameter = parameter
        self.value = value
        super().__init__(f"invalid {parameter}={value!r}: {reason}")


class ToolIdUnavailableError(LineheatError, RuntimeError):
    """sys.monitoring tool ID is already in use by another tool."""

    def __init__(self, tool_id: int) -> None:
        """Initialize with the requested tool id."""
        self.tool_id = tool_id
        super().__init__(f"sys.monitoring tool ID {tool_id} is already in use")
