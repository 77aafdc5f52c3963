"""Fakes and builders shared by the test modules."""

from collectors.interfaces import InterfaceFlags, InterfaceLookupError

NET_DEV_HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|"
    "bytes    packets errs drop fifo colls carrier compressed\n"
)


class FakeClock:
    """Manually advanced clock, callable like time.monotonic."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def net_dev_line(name, rx_bytes=0, rx_packets=0, rx_errors=0, rx_drops=0,
                 tx_bytes=0, tx_packets=0, tx_errors=0, tx_drops=0) -> str:
    """Format one /proc/net/dev record."""
    return (
        f"{name:>6}: {rx_bytes} {rx_packets} {rx_errors} {rx_drops} 0 0 0 0 "
        f"{tx_bytes} {tx_packets} {tx_errors} {tx_drops} 0 0 0 0\n"
    )


class FakeCounterSource:
    """Counter reader returning whatever lines the test last loaded."""

    def __init__(self):
        self.lines = []
        self.error = None

    def load(self, *lines) -> None:
        self.lines = list(lines)

    def __call__(self) -> list:
        if self.error is not None:
            raise self.error
        return list(self.lines)


class FakeInterfaces:
    """Flags and description lookups backed by dicts.

    Interfaces not listed in `flags` fail the lookup, like an interface
    that vanished between reading the counters and resolving its flags.
    """

    def __init__(self):
        self.flags = {}
        self.descriptions = {}

    def add(self, name, up=True, loopback=False, description=None) -> None:
        self.flags[name] = InterfaceFlags(up=up, loopback=loopback)
        if description is not None:
            self.descriptions[name] = description

    def get_flags(self, name) -> InterfaceFlags:
        try:
            return self.flags[name]
        except KeyError:
            raise InterfaceLookupError(f"no such interface: {name}")

    def get_description(self, name) -> str:
        return self.descriptions.get(name, 'Unknown')
