"""Tests for the console display and memory stats."""

import io

from rich.console import Console

from puzzle512_solver.cli import main as cli
from puzzle512_solver.utils import MemoryMonitor, MemoryStats, memory
from puzzle512_solver.utils.rich_display import SolverDisplay


def _low_memory_stats():
    return MemoryStats(
        process_rss_mb=100.0,
        system_total_gb=8.0,
        system_available_gb=0.5,
        system_percent=50.0,
        swap_used_gb=1.5,
    )


def test_memory_table_shows_swap(monkeypatch):
    """Test the memory table reports RSS, peak and swap usage."""
    monkeypatch.setattr(memory, "get_memory_stats", _low_memory_stats)
    output = Console(file=io.StringIO(), width=100)
    display = SolverDisplay(memory_monitor=MemoryMonitor(), output=output)

    display.show_memory_table()

    text = output.file.getvalue()
    assert "Process RSS" in text
    assert "Swap Used" in text
    assert "1.5GB" in text


def test_memory_table_without_monitor():
    assert SolverDisplay(output=Console(file=io.StringIO())).show_memory_table() is None


def test_solve_warns_on_low_memory(tmp_path, monkeypatch, capsys, sure_win_strategy):
    """Test the solve command warns before starting when RAM is short."""
    monkeypatch.setattr(memory, "get_memory_stats", _low_memory_stats)
    monkeypatch.setattr(cli, "optimal_strategy", lambda **kwargs: sure_win_strategy)

    cli.main(["solve", str(tmp_path / "strategy.bin"), "--no-progress"])

    assert "Low memory" in capsys.readouterr().out
