"""Snowflake-style pool identifiers.

Pool ids are opaque decimal strings that sort in creation order, so the
registry's side table can be listed chronologically without a second index.
One generator per process; the node id only matters when several processes
share a log stream.
"""

import threading
import time


class SnowflakeIdGenerator:
    """41-bit ms timestamp | 10-bit node id | 12-bit per-ms counter."""

    EPOCH_MS = 1_700_000_000_000
    NODE_BITS = 10
    COUNTER_BITS = 12

    def __init__(self, node_id: int = 0) -> None:
        if not (0 <= node_id < (1 << self.NODE_BITS)):
            raise ValueError(f"node_id must be 0-{(1 << self.NODE_BITS) - 1}")
        self._node_id = node_id
        self._counter = 0
        self._last_ms = -1
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            now = self._now_ms()
            if now < self._last_ms:
                # wall clock stepped back; keep issuing from the last tick
                now = self._last_ms
            if now == self._last_ms:
                self._counter = (self._counter + 1) & ((1 << self.COUNTER_BITS) - 1)
                if self._counter == 0:
                    now = self._spin_until_after(now)
            else:
                self._counter = 0
            self._last_ms = now
            value = (
                (now - self.EPOCH_MS) << (self.NODE_BITS + self.COUNTER_BITS)
                | self._node_id << self.COUNTER_BITS
                | self._counter
            )
            return str(value)

    @staticmethod
    def _now_ms() -> int:
        return time.time_ns() // 1_000_000

    def _spin_until_after(self, last_ms: int) -> int:
        now = self._now_ms()
        while now <= last_ms:
            now = self._now_ms()
        return now


_generator = SnowflakeIdGenerator()


def generate_id() -> str:
    """Next pool id from the process-wide generator."""
    return _generator.next_id()
