"""In-memory store of the last counter sample per network interface."""

import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterfaceSample:
    """Last observed cumulative counters for one interface.

    `sampled_at` is the time the counters were read and is used for rates.
    `last_seen` is refreshed on every put and drives eviction.
    """

    name: str
    rx_bytes: int
    tx_bytes: int
    rx_packets: int
    tx_packets: int
    rx_errors: int
    tx_errors: int
    rx_drops: int
    tx_drops: int
    sampled_at: float
    last_seen: float = 0.0


class SampleStore:
    """Bounded map of interface name to its latest InterfaceSample.

    A single lock guards the whole map. The sampler is the only writer and
    runs once per second, so finer-grained locking buys nothing.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._samples: dict = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._samples

    def get(self, name: str) -> Optional[InterfaceSample]:
        """Return the stored sample for `name`, or None if not tracked."""
        with self._lock:
            return self._samples.get(name)

    def put(self, name: str, sample: InterfaceSample) -> InterfaceSample:
        """Insert or replace the sample for `name`, stamping `last_seen` now."""
        stored = replace(sample, name=name, last_seen=self._clock())
        with self._lock:
            self._samples[name] = stored
        return stored

    def names(self) -> list:
        with self._lock:
            return sorted(self._samples)

    def snapshot(self) -> list:
        """Return all samples ordered by name."""
        with self._lock:
            return [self._samples[name] for name in sorted(self._samples)]

    def evict_stale(self, now: float, max_age: float) -> list:
        """Remove every sample whose `last_seen` is older than `now - max_age`."""
        cutoff = now - max_age
        with self._lock:
            stale = sorted(
                name for name, sample in self._samples.items()
                if sample.last_seen < cutoff
            )
            for name in stale:
                del self._samples[name]

        if stale:
            logger.info(f"Evicted {len(stale)} stale interfaces: {', '.join(stale)}")
        return stale

    def enforce_capacity(self, max_size: int) -> list:
        """Drop the least recently seen samples until at most `max_size` remain.

        Ties on `last_seen` are broken by name so eviction order is stable.
        """
        with self._lock:
            excess = len(self._samples) - max_size
            if excess <= 0:
                return []

            oldest = sorted(
                self._samples.values(),
                key=lambda s: (s.last_seen, s.name)
            )[:excess]
            evicted = [sample.name for sample in oldest]
            for name in evicted:
                del self._samples[name]

        logger.info(f"Store over capacity ({max_size}), evicted {len(evicted)} interfaces")
        return evicted
