"""Guard against reusing the same normal cells in quick succession."""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable

from cachetools import LRUCache

from .ckbtypes import LiveCell, OutPoint


class NormalCellRepeater:
    """Remembers recently spent out-points and refuses them until they expire."""

    def __init__(
        self,
        secs_overdue: int,
        max_size: int = 20000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.secs_overdue = secs_overdue
        self._clock = clock
        self._lock = threading.Lock()
        self._recorder: LRUCache = LRUCache(maxsize=max_size)

    def _now(self) -> int:
        return int(self._clock())

    def _can_use(self, out_point: OutPoint) -> bool:
        recorded = self._recorder.get(out_point.serialize().hex())
        if recorded is None:
            return True
        return self._now() - recorded > self.secs_overdue

    def can_use(self, out_point: OutPoint) -> bool:
        """True unless the out-point was recorded within ``secs_overdue`` seconds."""
        with self._lock:
            return self._can_use(out_point)

    def record(self, out_points: Iterable[OutPoint]) -> None:
        """Mark the out-points as used now."""
        with self._lock:
            now = self._now()
            for out_point in out_points:
                self._recorder[out_point.serialize().hex()] = now

    def usable_cells(self, live_cells: Iterable[LiveCell]) -> list[LiveCell]:
        """Keep only the live cells whose out-points may be used."""
        with self._lock:
            return [cell for cell in live_cells if self._can_use(cell.out_point)]