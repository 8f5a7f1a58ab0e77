"""
Opt-in timing of grammar rules.

Set ``JSONCOMB_PROFILE`` in the environment before import to record how often
each named rule runs and how long it takes. With the variable unset every hook
is a no-op.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "JSONCOMB_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for one named rule."""

    rule_name: str
    call_count: int = 0
    failure_count: int = 0
    total_time_ns: int = 0
    chars_consumed: int = 0

    def record_call(
        self, duration_ns: int, chars: int = 0, failed: bool = False
    ) -> None:
        """Records one invocation of the rule."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_consumed += chars
        if failed:
            self.failure_count += 1


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager timing one rule invocation."""

        def __init__(self, rule_name: str) -> None:
            self.rule_name = rule_name
            self.chars = 0
            self.start_time = 0

        def consumed(self, chars: int) -> None:
            self.chars = chars

        def __enter__(self) -> ProfileContext:
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _hot_path_stats.setdefault(
                self.rule_name, HotPathStats(self.rule_name)
            )
            stats.record_call(duration, self.chars, exc_type is not None)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, rule_name: str) -> None:
            pass

        def consumed(self, chars: int) -> None:
            pass

        def __enter__(self) -> ProfileContext:
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass
