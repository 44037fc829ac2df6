"""Cache of the node's transaction pool and of recently spent cells."""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Mapping, Optional

from .ckbtypes import OutPoint

logger = logging.getLogger(__name__)

PoolFetcher = Callable[[], Optional[Mapping[str, Any]]]


@dataclass
class RecentUsedTx:
    """A cell produced by one of our own recent transactions."""

    time_unix_add: int
    out_point: OutPoint
    detail: Any = None


class ChainTxPool:
    """Snapshot of the node's raw transaction pool, refreshed on demand."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, list[str]] | None = {}

    def refresh(self, fetch: PoolFetcher) -> bool:
        """Replace the snapshot with ``fetch()``; keep the old one if it fails."""
        try:
            result = fetch()
        except Exception:
            logger.warning("fetching the raw tx pool failed", exc_info=True)
            return False
        with self._lock:
            if result is None:
                self._entries = None
            else:
                self._entries = {str(name): [str(h) for h in hashes] for name, hashes in result.items()}
        return True

    def run(
        self,
        fetch: PoolFetcher,
        interval: float,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Refresh now and then every ``interval`` seconds until ``stop_event`` is set."""
        event = stop_event if stop_event is not None else threading.Event()
        self.refresh(fetch)
        while not event.wait(interval):
            self.refresh(fetch)

    def find_tx(self, tx_hash: str) -> bool:
        """True when ``tx_hash`` is in any section of the pool."""
        with self._lock:
            if self._entries is None:
                return False
            return any(tx_hash in hashes for hashes in self._entries.values())

    def dump(self) -> str:
        """The snapshot as indented JSON, or ``"empty"`` when there is none."""
        with self._lock:
            if self._entries is None:
                return "empty"
            return json.dumps(self._entries, indent=1)


class RecentUsedTxManager:
    """Remembers recently produced cells so they can be spent before they confirm."""

    def __init__(
        self,
        retry_time: int,
        retry_delay: float,
        overdue_sec: int,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.retry_time = retry_time
        self.retry_delay = retry_delay
        self.overdue_sec = overdue_sec
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._used: dict[Hashable, RecentUsedTx] = {}

    def _expired(self, tx: RecentUsedTx) -> bool:
        return int(self._clock()) - tx.time_unix_add > self.overdue_sec

    def pop_local(self, key: Hashable) -> RecentUsedTx | None:
        """Remove and return the entry for ``key`` unless it has expired."""
        with self._lock:
            tx = self._used.pop(key, None)
        if tx is None or self._expired(tx):
            return None
        return tx

    def pop_confirmed(self, pool: ChainTxPool, key: Hashable) -> RecentUsedTx | None:
        """Return the entry for ``key`` once its transaction shows up in ``pool``.

        Expired entries are dropped. The pool is checked up to ``retry_time``
        times, waiting ``retry_delay`` seconds after each miss.
        """
        with self._lock:
            tx = self._used.get(key)
        if tx is None:
            return None
        if self._expired(tx):
            with self._lock:
                self._used.pop(key, None)
            return None
        target = tx.out_point.tx_hash_hex
        for _ in range(self.retry_time):
            if pool.find_tx(target):
                with self._lock:
                    self._used.pop(key, None)
                return tx
            self._sleep(self.retry_delay)
        return None

    def add(self, key: Hashable, tx: RecentUsedTx) -> None:
        with self._lock:
            self._used[key] = tx

    def add_by_hash(self, tx: RecentUsedTx) -> None:
        """Store ``tx`` under its own transaction hash."""
        self.add(tx.out_point.tx_hash, tx)

    def remove(self, key: Hashable, new_tx_hash: bytes) -> None:
        """Drop the entry for ``key`` if it refers to ``new_tx_hash``."""
        with self._lock:
            tx = self._used.get(key)
            if tx is not None and tx.out_point.tx_hash == new_tx_hash:
                del self._used[key]

    def remove_by_hash(self, tx_hash: bytes) -> None:
        with self._lock:
            self._used.pop(tx_hash, None)