"""
Opt-in hot path profiling, enabled with the LFPJSON_PROFILE variable.

The variable is read once at import. When it is unset (or Python runs with
``-O``) ``ProfileContext`` does nothing and no statistics are collected.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "LFPJSON_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated cost of one scanner, reader or writer hot path."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars

    @property
    def mean_time_ns(self) -> float:
        if not self.call_count:
            return 0.0
        return self.total_time_ns / self.call_count

    def __str__(self) -> str:
        return (
            f"{self.function_name}: {self.call_count} calls, "
            f"{self.total_time_ns} ns total, "
            f"{self.mean_time_ns:.0f} ns/call, "
            f"{self.chars_processed} chars"
        )


_hot_path_stats: dict[str, HotPathStats] = {}


class _TimedContext:
    """
    Times a block and charges it to one named hot path.

    ``chars`` may be updated inside the block once the amount of input
    handled is known, e.g. the length of a scanned string.
    """

    def __init__(self, func_name: str, chars: int = 0) -> None:
        self.func_name = func_name
        self.chars = chars
        self.start_time = 0

    def __enter__(self) -> "_TimedContext":
        self.start_time = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        duration = time.perf_counter_ns() - self.start_time
        stats = _hot_path_stats.get(self.func_name)
        if stats is None:
            stats = _hot_path_stats[self.func_name] = HotPathStats(
                self.func_name
            )
        stats.record_call(duration, self.chars)


class _NullContext:
    __slots__ = ("chars",)

    def __init__(self, func_name: str, chars: int = 0) -> None:
        self.chars = chars

    def __enter__(self) -> "_NullContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass


ProfileContext = _TimedContext if PROFILE_HOT_PATHS else _NullContext


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the statistics collected so far."""
    return dict(_hot_path_stats)


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()


def format_hot_path_stats() -> str:
    """Renders the statistics one path per line, most expensive first."""
    ordered = sorted(
        _hot_path_stats.values(),
        key=lambda stats: stats.total_time_ns,
        reverse=True,
    )
    return "\n".join(str(stats) for stats in ordered)
