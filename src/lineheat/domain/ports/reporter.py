"""Reporter port: StatsResult -> text.

ConsoleReporter (rich) and JsonReporter are the shipped implementations.
Any object with a matching report() method plugs into the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from lineheat.domain.model.heatmap import StatsResult


class ReporterProtocol(Protocol):
    """Contract for stats reporters.

    Returns the rendered text; printing or writing it is the caller's job.

    Example:
        class CsvReporter:
            def report(self, result: StatsResult) -> str:
                rows = [f"{hot.key.file},{hot.key.line},{hot.count}" for hot in result.hottest]
                return "\\n".join(["file,line,count", *rows])
    """

    def report(self, result: StatsResult) -> str:
        """Render stats.

        Args:
            result: Stats of one query.

        Returns:
            Rendered text.
        """
        ...
