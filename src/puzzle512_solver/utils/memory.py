"""
Memory monitoring for long in-memory solves.

The visited set, evaluation order and value map all grow with the number
of canonical boards, so the explorer and the value solver check RAM
periodically and abort before the machine starts swapping. The pipeline
checks once more before encoding the strategy table.
"""

import logging
import os
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)


class ResourceCheckError(Exception):
    """Raised when resource limits are exceeded."""
    pass


@dataclass
class MemoryStats:
    """Memory usage statistics."""

    process_rss_mb: float  # Resident Set Size (actual RAM used by process)
    system_total_gb: float  # Total system RAM
    system_available_gb: float  # Available RAM for new allocations
    system_percent: float  # Percentage of RAM in use
    swap_used_gb: float


def get_memory_stats() -> MemoryStats:
    """
    Get current memory usage statistics.

    Returns:
        MemoryStats for this process and the whole system
    """
    process = psutil.Process(os.getpid())
    mem_info = process.memory_info()
    sys_mem = psutil.virtual_memory()
    swap = psutil.swap_memory()

    return MemoryStats(
        process_rss_mb=mem_info.rss / (1024**2),
        system_total_gb=sys_mem.total / (1024**3),
        system_available_gb=sys_mem.available / (1024**3),
        system_percent=sys_mem.percent,
        swap_used_gb=swap.used / (1024**3),
    )


class MemoryMonitor:
    """
    Tracks RAM during a solve and aborts if limits are exceeded.

    Default safety limits:
    - RAM: stop if > 90% of system memory is used
    - Warn when less than 1GB is available
    """

    def __init__(
        self,
        max_ram_percent: float = 90.0,
        warning_threshold_gb: float = 1.0,
    ):
        """
        Initialize memory monitor.

        Args:
            max_ram_percent: Maximum system RAM usage percentage before aborting
            warning_threshold_gb: Available RAM below this logs a warning
        """
        if not 0.0 < max_ram_percent <= 100.0:
            raise ValueError(f"max_ram_percent must be in (0, 100], got {max_ram_percent}")
        self.max_ram_percent = max_ram_percent
        self.warning_threshold_gb = warning_threshold_gb
        self.peak_rss_mb = 0.0
        self._warnings = 0
        self._warning_interval = 60  # Log warnings at most once per 60 checks

    def get_stats(self) -> MemoryStats:
        """Get current memory statistics and record the peak RSS."""
        stats = get_memory_stats()
        self.peak_rss_mb = max(self.peak_rss_mb, stats.process_rss_mb)
        return stats

    def check(self) -> MemoryStats:
        """
        Check RAM limits.

        Returns:
            Current stats if within limits

        Raises:
            ResourceCheckError: If system RAM usage exceeds max_ram_percent
        """
        stats = self.get_stats()

        if stats.system_percent > self.max_ram_percent:
            raise ResourceCheckError(
                f"ABORT: High RAM usage! {stats.system_percent:.1f}% used "
                f"(limit: {self.max_ram_percent}%)"
            )

        if stats.system_available_gb < self.warning_threshold_gb:
            if self._warnings % self._warning_interval == 0:
                logger.warning(
                    f"Memory pressure: {stats.system_available_gb:.1f}GB available "
                    f"(threshold: {self.warning_threshold_gb:.1f}GB)"
                )
            self._warnings += 1

        return stats

    def log_status(self) -> None:
        """Log current memory status."""
        stats = self.get_stats()
        logger.info(
            f"Memory: Process={stats.process_rss_mb:.0f}MB, "
            f"System={stats.system_available_gb:.1f}GB available "
            f"({stats.system_percent:.0f}% used)"
        )
