"""Console reporter: StatsResult -> rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from lineheat.domain.model.heatmap import HeatmapSnapshot, StatsResult


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_heatmap: Render the per-file section after the hottest lines.
        max_lines_per_file: Lines shown per file. None = unlimited.
        width: Console width in characters.
        color: Emit ANSI styling.
    """

    show_heatmap: bool = True
    max_lines_per_file: int | None = None
    width: int = 120
    color: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_lines_per_file is not None and self.max_lines_per_file < 0:
            raise ValueError(f"max_lines_per_file must be >= 0, got {self.max_lines_per_file}")
        if self.width <= 0:
            raise ValueError(f"width must be > 0, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, result: StatsResult) -> str:
        """Format stats as rich formatted string."""
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.color,
            no_color=not self._config.color,
            width=self._config.width,
        )

        self._render_header(console, result)
        self._render_hottest(console, result)

        if self._config.show_heatmap:
            self._render_heatmap(console, result.heatmap)

        return output.getvalue()

    def _render_header(self, console: Console, result: StatsResult) -> None:
        """Render header with totals."""
        console.print()
        console.rule("[bold]HEATMAP STATS[/bold]")
        console.print()
        console.print(f"[bold]Total lines tracked:[/bold] {result.total_lines}")
        console.print(f"[bold]Total executions:[/bold] {result.total_executions}")
        console.print()

    def _render_hottest(self, console: Console, result: StatsResult) -> None:
        """Render hottest-lines table."""
        if not result.hottest:
            return

        console.print(f"[bold]TOP {len(result.hottest)} HOTTEST LINES[/bold]")
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Location", style="cyan")
        table.add_column("Executions", style="red", justify="right")

        for rank, hot in enumerate(result.hottest, start=1):
            table.add_row(str(rank), str(hot.key), str(hot.count))

        console.print(table)
        console.print()

    def _render_heatmap(self, console: Console, heatmap: HeatmapSnapshot) -> None:
        """Render per-file line counts, files sorted by name."""
        for file in sorted(heatmap.files):
            lines = heatmap.files[file]
            console.print(f"[bold]{file}[/bold] ({len(lines)} lines)")

            table = Table(show_header=True, header_style="bold", box=None)
            table.add_column("Line", style="cyan", justify="right")
            table.add_column("Executions", justify="right")

            ordered = sorted(lines.items())
            if self._config.max_lines_per_file is not None:
                ordered = ordered[: self._config.max_lines_per_file]
            for line, count in ordered:
                table.add_row(str(line), str(count))

            console.print(table)
            console.print()
