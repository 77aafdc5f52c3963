"""Sampling engine: turns cumulative interface counters into throughput gauges."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from collectors.interfaces import (
    InterfaceLookupError,
    get_interface_description,
    get_interface_flags,
)
from collectors.network import parse_net_dev_line, read_net_dev
from metrics import NetworkGauges
from store import InterfaceSample, SampleStore

logger = logging.getLogger(__name__)

BYTES_TO_BITS = 8

DEFAULT_STALE_AFTER = 300.0
DEFAULT_MAX_INTERFACES = 1000


@dataclass
class SampleResult:
    """Summary of one sampling cycle."""

    seen: list = field(default_factory=list)
    published: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    malformed: int = 0
    evicted: list = field(default_factory=list)


class NetworkSampler:
    """Reads interface counters, derives rates and publishes them as gauges.

    The sampler is the only writer to both the sample store and the gauges.
    Readers of the gauges (the /metrics endpoint) never call into it.
    Interfaces that are filtered out or evicted lose their gauge series.

    Counter resets and wraparound are not special-cased: a counter that went
    backwards yields a negative rate for that cycle, published as computed.
    """

    def __init__(
        self,
        store: SampleStore,
        gauges: NetworkGauges,
        stale_after: float = DEFAULT_STALE_AFTER,
        max_interfaces: int = DEFAULT_MAX_INTERFACES,
        read_counters: Callable[[], list] = read_net_dev,
        get_flags: Callable = get_interface_flags,
        get_description: Callable[[str], str] = get_interface_description,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.gauges = gauges
        self.stale_after = stale_after
        self.max_interfaces = max_interfaces
        self._read_counters = read_counters
        self._get_flags = get_flags
        self._get_description = get_description
        self._clock = clock

    def sample_once(self) -> SampleResult:
        """Run one sampling cycle.

        Raises CounterSourceError if the counter source cannot be read; the
        store and gauges are left untouched in that case.
        """
        lines = self._read_counters()
        result = SampleResult()

        for line in lines:
            counters = parse_net_dev_line(line)
            if counters is None:
                result.malformed += 1
                continue

            name = counters.name
            result.seen.append(name)

            if not self._is_active(name):
                result.skipped.append(name)
                if self.gauges.remove_interface(name):
                    logger.info(f"Interface {name} is down or unresolvable, dropped its metrics")
                continue

            self.gauges.set_info(name, self._get_description(name))

            now = self._clock()
            if self._publish_rates(counters, self.store.get(name), now):
                result.published.append(name)

            self.store.put(name, InterfaceSample(
                name=name,
                rx_bytes=counters.rx_bytes,
                tx_bytes=counters.tx_bytes,
                rx_packets=counters.rx_packets,
                tx_packets=counters.tx_packets,
                rx_errors=counters.rx_errors,
                tx_errors=counters.tx_errors,
                rx_drops=counters.rx_drops,
                tx_drops=counters.tx_drops,
                sampled_at=now,
            ))

        result.evicted = self.store.evict_stale(self._clock(), self.stale_after)
        result.evicted += self.store.enforce_capacity(self.max_interfaces)
        for name in result.evicted:
            self.gauges.remove_interface(name)

        logger.debug(
            f"Sampled {len(result.seen)} interfaces, published {len(result.published)}, "
            f"skipped {len(result.skipped)}, malformed {result.malformed}"
        )
        return result

    def _is_active(self, name: str) -> bool:
        """True if the interface is administratively up and not loopback."""
        try:
            flags = self._get_flags(name)
        except InterfaceLookupError as e:
            logger.debug(f"Skipping {name}: {e}")
            return False
        return flags.up and not flags.loopback

    def _publish_rates(self, counters, previous, now: float) -> bool:
        if previous is None:
            return False

        elapsed = now - previous.sampled_at
        if elapsed <= 0:
            logger.debug(f"Skipping {counters.name}: non-positive elapsed time {elapsed}")
            return False

        rx_bits = (counters.rx_bytes - previous.rx_bytes) * BYTES_TO_BITS / elapsed
        tx_bits = (counters.tx_bytes - previous.tx_bytes) * BYTES_TO_BITS / elapsed

        self.gauges.set_speed(counters.name, rx_bits, tx_bits)
        self.gauges.set_counters(counters.name, counters)
        return True
