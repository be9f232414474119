from __future__ import annotations

import time
from typing import Dict


class SimpleMetrics:
    """Wall-clock timer plus named counters for one algorithm stage."""

    def __init__(self) -> None:
        self._counters: Dict[str, int] = {}
        self._t_start = 0
        self._t_stop = 0

    def start(self) -> None:
        self._t_start = time.perf_counter_ns()

    def stop(self) -> None:
        self._t_stop = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        return self._t_stop - self._t_start

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000.0

    def increment(self, name: str, by: int = 1) -> None:
        self._counters[name] = self._counters.get(name, 0) + int(by)

    def counter(self, name: str) -> int:
        return self._counters.get(name, 0)

    def reset(self) -> None:
        self._t_start = 0
        self._t_stop = 0
        self._counters.clear()

    def as_dict(self) -> dict[str, float]:
        out: dict[str, float] = {"time_ms": self.elapsed_ms}
        out.update(self._counters)
        return out

    def summary(self) -> str:
        lines = [f"Time: {self.elapsed_ms:.3f} ms", "Counters:"]
        for name in sorted(self._counters):
            lines.append(f"  {name}: {self._counters[name]}")
        return "\n".join(lines) + "\n"


class NullMetrics(SimpleMetrics):
    """Metrics sink that records nothing (used when no collector is injected)."""

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def increment(self, name: str, by: int = 1) -> None:
        pass


def ensure_metrics(metrics: SimpleMetrics | None) -> SimpleMetrics:
    return NullMetrics() if metrics is None else metrics
