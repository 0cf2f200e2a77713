"""Stack-frame text parsing.

Two fixed shapes are recognised:
    at <name> (<file>:<line>:<col>)        V8-style, line and column 1-based
    File "<file>", line <line>, in <name>  CPython traceback

Anything else is not a frame (runtime internals, messages, blank
lines) and is skipped without error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator

_V8_FRAME: Final = re.compile(r"at\s+(?P<func>.+?)\s+\((?P<file>.+?):(?P<line>\d+):(?P<col>\d+)\)")
_PYTHON_FRAME: Final = re.compile(r'File "(?P<file>.+?)", line (?P<line>\d+), in (?P<func>\S+)')


@dataclass(frozen=True, slots=True)
class StackFrame:
    """One parsed stack frame.

    Attributes:
        func: Function name as printed
        file: File path as printed
        line: Line number (1-based)
        column: Column (1-based), None when the format has none
    """

    func: str
    file: str
    line: int
    column: int | None = None

    @property
    def short_file(self) -> str:
        """Last path component of file."""
        return basename(self.file)


def basename(path: str) -> str:
    """Last path component, for both / and \\ separators."""
    tail = path.replace("\\", "/").rsplit("/", 1)[-1]
    return tail or path


def parse_frame(text: str) -> StackFrame | None:
    """Parse one stack-trace line. None if it is not a frame."""
    match = _V8_FRAME.search(text)
    if match is not None:
        return StackFrame(
            func=match["func"],
            file=match["file"],
            line=int(match["line"]),
            column=int(match["col"]),
        )

    match = _PYTHON_FRAME.search(text)
    if match is not None:
        return StackFrame(func=match["func"], file=match["file"], line=int(match["line"]))

    return None


def parse_stack(text: str) -> Iterator[StackFrame]:
    """Yield every frame of a multi-line stack trace, in order."""
    for line in text.splitlines():
        frame = parse_frame(line)
        if frame is not None:
            yield frame
