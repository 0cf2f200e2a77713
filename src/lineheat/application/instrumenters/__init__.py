"""Ingestion sources implementing the Instrumenter protocol.

- ManualInstrumenter: explicit track_line() calls
- StackTraceInstrumenter: captured stack traces, mapped via source maps
- LineMonitor: interpreter LINE events (sys.monitoring, PEP 669)
"""

from lineheat.application.instrumenters.line_monitor import (
    LINEHEAT_TOOL_ID,
    LINEHEAT_TOOL_NAME,
    LineMonitor,
)
from lineheat.application.instrumenters.manual import ManualInstrumenter
from lineheat.application.instrumenters.stack_trace import StackTraceInstrumenter

__all__ = [
    "LINEHEAT_TOOL_ID",
    "LINEHEAT_TOOL_NAME",
    "LineMonitor",
    "ManualInstrumenter",
    "StackTraceInstrumenter",
]
