"""Console reporter: purity reports → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Mapping

    from inlinecheck.domain.model.purity import PurityReport


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_pure: List pure callables too, not only impure ones.
        width: Console width in characters.
    """

    show_pure: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs a rich table of verdicts.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, reports: Mapping[str, PurityReport]) -> str:
        """Format purity reports as rich formatted string.

        Args:
            reports: Callable label → its purity report.

        Returns:
            Formatted string with colors and a verdict table.
        """
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width)

        pure_count = sum(1 for report in reports.values() if report.is_pure)

        console.print()
        console.rule("[bold]PURITY REPORT[/bold]")
        console.print()
        console.print(
            f"[bold]Callables:[/bold] {len(reports)} "
            f"([green]pure: {pure_count}[/green], "
            f"[red]impure: {len(reports) - pure_count}[/red])"
        )
        console.print()

        table = self._build_table(reports)
        if table.row_count:
            console.print(table)
            console.print()

        return output.getvalue()

    def _build_table(self, reports: Mapping[str, PurityReport]) -> Table:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Callable", style="cyan")
        table.add_column("Verdict")
        table.add_column("Reasons")

        for label, report in reports.items():
            if report.is_pure and not self._config.show_pure:
                continue
            verdict = "[green]pure[/green]" if report.is_pure else "[red]impure[/red]"
            table.add_row(label, verdict, "\n".join(report.violations))

        return table
