"""Raw network interface counters from /proc/net/dev."""

import os
import logging
import threading
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

PROC_BASE = '/host/proc' if os.path.exists('/host/proc') else '/proc'

# Interface name plus 8 receive and 8 transmit columns
NET_DEV_FIELDS = 17

# Seconds to wait for a read before treating the source as unavailable
READ_TIMEOUT = 5.0


class CounterSourceError(Exception):
    """Raised when the counter source cannot be read."""


@dataclass(frozen=True)
class InterfaceCounters:
    """Cumulative counters for one interface as read from the kernel."""

    name: str
    rx_bytes: int
    rx_packets: int
    rx_errors: int
    rx_drops: int
    tx_bytes: int
    tx_packets: int
    tx_errors: int
    tx_drops: int


def read_net_dev(path: Optional[str] = None, timeout: float = READ_TIMEOUT) -> list:
    """Return the per-interface lines of /proc/net/dev, header lines skipped.

    The read runs in a daemon thread so a stalled source raises
    CounterSourceError after `timeout` seconds instead of blocking the caller.
    """
    path = path or f'{PROC_BASE}/net/dev'
    outcome = {}

    def _read():
        try:
            with open(path, 'r') as f:
                outcome['lines'] = f.readlines()[2:]
        except OSError as e:
            outcome['error'] = e

    reader = threading.Thread(target=_read, name='net-dev-reader', daemon=True)
    reader.start()
    reader.join(timeout)

    if reader.is_alive():
        raise CounterSourceError(f"Timed out reading {path} after {timeout}s")
    if 'error' in outcome:
        raise CounterSourceError(f"Error reading {path}: {outcome['error']}") from outcome['error']
    return outcome['lines']


def parse_net_dev_line(line: str) -> Optional[InterfaceCounters]:
    """Parse one /proc/net/dev line, or return None if it is malformed.

    The kernel may omit the space after the colon when the receive byte
    counter is wide, so the name is split on the colon, not on whitespace.
    """
    name, sep, rest = line.partition(':')
    name = name.strip()
    if not sep or not name:
        return None

    parts = [name] + rest.split()
    if len(parts) < NET_DEV_FIELDS:
        return None

    try:
        # rx: bytes packets errs drop fifo frame compressed multicast
        # tx: bytes packets errs drop fifo colls carrier compressed
        return InterfaceCounters(
            name=name,
            rx_bytes=int(parts[1]),
            rx_packets=int(parts[2]),
            rx_errors=int(parts[3]),
            rx_drops=int(parts[4]),
            tx_bytes=int(parts[9]),
            tx_packets=int(parts[10]),
            tx_errors=int(parts[11]),
            tx_drops=int(parts[12]),
        )
    except ValueError:
        logger.debug(f"Could not parse counters for {name}: {line.strip()}")
        return None
