"""
Opt-in profiling of the scanner, parser productions and renderer.

Setting ``JLEAF_PROFILE`` before import switches it on; the flag below can
also be flipped at runtime. Each profiled block records its call count,
elapsed time and how many characters of the document it consumed.
"""

import os
import time
from dataclasses import dataclass
from typing import Protocol

PROFILE_HOT_PATHS = __debug__ and "JLEAF_PROFILE" in os.environ


class _Cursor(Protocol):
    pos: int


@dataclass
class HotPathStats:
    """Accumulated figures for one profiled block."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars

    @property
    def chars_per_call(self) -> float:
        if not self.call_count:
            return 0.0
        return self.chars_processed / self.call_count


_hot_path_stats: dict[str, HotPathStats] = {}


class ProfileContext:
    """
    Times the enclosed block while profiling is on.

    Consumed characters are ``chars`` when the amount is known up front,
    plus however far ``cursor.pos`` moved inside the block. Parser
    productions pass their token stream as the cursor, so nested
    productions count the characters of their children too.
    """

    __slots__ = ("name", "chars", "cursor", "_enabled", "_start", "_start_pos")

    def __init__(
        self, name: str, chars: int = 0, cursor: _Cursor | None = None
    ):
        self.name = name
        self.chars = chars
        self.cursor = cursor
        self._enabled = PROFILE_HOT_PATHS
        self._start = 0
        self._start_pos = 0

    def __enter__(self) -> "ProfileContext":
        if self._enabled:
            if self.cursor is not None:
                self._start_pos = self.cursor.pos
            self._start = time.perf_counter_ns()
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._enabled:
            return

        duration = time.perf_counter_ns() - self._start
        chars = self.chars
        if self.cursor is not None:
            chars += self.cursor.pos - self._start_pos

        stats = _hot_path_stats.get(self.name)
        if stats is None:
            stats = _hot_path_stats[self.name] = HotPathStats(self.name)
        stats.record_call(duration, chars)


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the collected statistics, keyed by block name."""
    return _hot_path_stats.copy()


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()
