"""Wall-clock timing of kernels and a per-rank summary line."""

from __future__ import annotations

import time
from dataclasses import dataclass, fields


class Stopwatch:
    """Measures elapsed wall-clock seconds; usable as a context manager."""

    def __init__(self) -> None:
        self._started: float | None = None
        self.elapsed = 0.0

    def start(self) -> None:
        """Record the start time."""
        self._started = time.perf_counter()

    def stop(self) -> float:
        """Return and remember the seconds since ``start``."""
        if self._started is None:
            raise RuntimeError("stopwatch was not started")
        self.elapsed = time.perf_counter() - self._started
        return self.elapsed

    def __enter__(self) -> "Stopwatch":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


@dataclass
class KernelTimes:
    """Accumulated seconds spent in each phase of the factorisation."""

    transpose: float = 0.0
    isend: float = 0.0
    receive: float = 0.0
    getrf: float = 0.0
    tstrf: float = 0.0
    gessm: float = 0.0
    gessm_sparse: float = 0.0
    gessm_dense: float = 0.0
    ssssm: float = 0.0
    cuda_memcpy: float = 0.0
    wait: float = 0.0
    calculate_wait: float = 0.0

    def reset(self) -> None:
        """Set every counter back to zero."""
        for f in fields(self):
            setattr(self, f.name, 0.0)

    def summary(self, rank: int) -> str:
        """Return a tab-separated line: rank, wait, kernel times, their total, copy time."""
        total = self.gessm + self.getrf + self.tstrf + self.ssssm
        numbers = (
            self.calculate_wait,
            self.getrf,
            self.tstrf,
            self.gessm,
            self.ssssm,
            total,
            self.cuda_memcpy,
        )
        return "\t".join([str(rank), *(f"{v:.5f}" for v in numbers)])