"""Instrumenter protocol for ingestion of line executions.

Instrumentation strategies (manual calls, interpreter line events,
stack-trace sampling) decide WHERE lines executed. The engine only
needs to be told THAT they did.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Instrumenter(Protocol):
    """Contract for ingestion sources.

    Implementations must be thread-safe: call sites fire from arbitrary
    threads concurrently.

    Example:
        class PrintingInstrumenter:
            def on_line_executed(self, file: str, line: int) -> None:
                print(f"{file}:{line}")
    """

    def on_line_executed(self, file: str, line: int) -> None:
        """Record one execution of file:line.

        Args:
            file: Source file name
            line: Line number (1-based)
        """
        ...
