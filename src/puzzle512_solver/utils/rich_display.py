"""
Rich-based console output for the solver CLI.

Provides:
- Header and phase banners
- Status lines (success/warning/error)
- Summary and memory tables
"""

import logging
from typing import Dict, Optional

from rich.console import Console
from rich.table import Table

console = Console()
logger = logging.getLogger(__name__)


class SolverDisplay:
    """
    Rich-based display for solver runs.

    Shows:
    - Current phase
    - Result summary
    - Memory stats (when a MemoryMonitor is attached)
    """

    def __init__(self, memory_monitor=None, output: Optional[Console] = None):
        """
        Initialize solver display.

        Args:
            memory_monitor: Optional MemoryMonitor instance
            output: Console to print to (defaults to the module console)
        """
        self.memory_monitor = memory_monitor
        self.console = output or console

    def log_success(self, message: str):
        self.console.print(f"[green]✓[/green] {message}")

    def log_warning(self, message: str):
        self.console.print(f"[yellow]⚠[/yellow]  {message}")

    def log_error(self, message: str):
        self.console.print(f"[red]✗[/red] {message}")

    def show_header(self, title: str, output: str, gamma: float):
        """Show solver header."""
        self.console.rule(f"[bold blue]{title}[/bold blue]")
        self.console.print("Problem: 3x3 merge puzzle, win at exponent sum 45")
        self.console.print(f"Output: {output}")
        self.console.print(f"Hash load factor: {gamma}")
        self.console.print()

    def show_summary(self, stats: Dict[str, str]) -> Table:
        """Print a two-column summary table and return it."""
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")
        for name, value in stats.items():
            table.add_row(name, value)
        self.console.print(table)
        return table

    def show_memory_table(self) -> Optional[Table]:
        """Create and print memory status table."""
        if not self.memory_monitor:
            return None

        stats = self.memory_monitor.get_stats()
        ram_safe = stats.system_percent <= self.memory_monitor.max_ram_percent
        ram_color = "green" if ram_safe else "red"

        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")
        table.add_row(
            "RAM Used",
            f"[{ram_color}]{stats.system_percent:.1f}%[/{ram_color}] "
            f"({stats.system_total_gb - stats.system_available_gb:.1f}GB)",
        )
        table.add_row("Process RSS", f"{stats.process_rss_mb:.0f}MB")
        table.add_row("Swap Used", f"{stats.swap_used_gb:.1f}GB")
        table.add_row("Peak RSS", f"[bold]{self.memory_monitor.peak_rss_mb:.0f}MB[/bold]")
        self.console.print(table)
        return table
