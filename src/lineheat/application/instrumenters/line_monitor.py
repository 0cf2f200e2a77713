"""Automatic line instrumentation using sys.monitoring (PEP 669).

The interpreter reports every executed line; no source rewriting and no
import hooks are involved.

Design decisions:
- Only LINE events are enabled
- Code outside base_dir gets sys.monitoring.DISABLE for that location,
  so stdlib and site-packages lines cost one callback each, once
- File names are reported relative to base_dir as POSIX paths
"""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Final

from lineheat.domain.exceptions import ToolIdUnavailableError

if TYPE_CHECKING:
    import types

    from lineheat.domain.ports.instrumenter import Instrumenter

# sys.monitoring reserves 0-2 and 5 (debugger, coverage, profiler, optimizer)
LINEHEAT_TOOL_ID: Final = 4
LINEHEAT_TOOL_NAME: Final = "lineheat"


class LineMonitor:
    """Forwards interpreter LINE events under base_dir to an Instrumenter.

    Thread-safe: sys.monitoring callbacks fire on whatever thread runs
    the code; the sink instrumenter must be thread-safe itself.

    Lifecycle:
        monitor = LineMonitor(sink, base_dir)
        monitor.start()
        # ... run code ...
        monitor.stop()
    """

    def __init__(
        self,
        sink: Instrumenter,
        base_dir: Path,
        tool_id: int = LINEHEAT_TOOL_ID,
    ) -> None:
        """Initialize monitor.

        Args:
            sink: Receives on_line_executed(file, line) for tracked lines
            base_dir: Only files under this directory are tracked
            tool_id: sys.monitoring tool slot to claim

        Raises:
            ValueError: If base_dir is not a directory
        """
        if not base_dir.is_dir():
            raise ValueError(f"base_dir must be a directory: {base_dir}")

        self._sink = sink
        self._base_dir = base_dir.resolve()
        self._tool_id = tool_id
        self._started = False
        self._lock = threading.Lock()
        # co_filename -> relative name, None = outside base_dir
        self._names: dict[str, str | None] = {}

    @property
    def is_started(self) -> bool:
        """Check if monitor is currently running."""
        return self._started

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def start(self) -> None:
        """Claim the tool ID and enable LINE events.

        Raises:
            RuntimeError: If already started
            ToolIdUnavailableError: If tool ID is in use
        """
        with self._lock:
            if self._started:
                raise RuntimeError("monitor already started")

            try:
                sys.monitoring.use_tool_id(self._tool_id, LINEHEAT_TOOL_NAME)
            except ValueError as e:
                raise ToolIdUnavailableError(self._tool_id) from e

            sys.monitoring.register_callback(
                self._tool_id,
                sys.monitoring.events.LINE,
                self._on_line,
            )
            sys.monitoring.set_events(self._tool_id, sys.monitoring.events.LINE)
            # Locations disabled during an earlier run must fire again
            sys.monitoring.restart_events()
            self._started = True

    def stop(self) -> None:
        """Disable events and free the tool ID.

        Raises:
            RuntimeError: If not started
        """
        with self._lock:
            if not self._started:
                raise RuntimeError("monitor not started")

            sys.monitoring.set_events(self._tool_id, 0)
            sys.monitoring.register_callback(
                self._tool_id,
                sys.monitoring.events.LINE,
                None,
            )
            sys.monitoring.free_tool_id(self._tool_id)
            self._started = False

    def __enter__(self) -> LineMonitor:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _relative_name(self, filename: str) -> str | None:
        """Name relative to base_dir, None if outside. Cached per filename."""
        try:
            return self._names[filename]
        except KeyError:
            pass

        if filename.startswith("<"):
            # <string>, <frozen ...>: no file on disk
            self._names[filename] = None
            return None

        try:
            name: str | None = Path(filename).resolve().relative_to(self._base_dir).as_posix()
        except (ValueError, OSError):
            name = None
        self._names[filename] = name
        return name

    def _on_line(self, code: types.CodeType, line_number: int) -> object:
        """Callback for LINE events.

        Returns:
            sys.monitoring.DISABLE for code outside base_dir
            None to keep tracking this location
        """
        name = self._relative_name(code.co_filename)
        if name is None:
            return sys.monitoring.DISABLE

        self._sink.on_line_executed(name, line_number)
        return None
