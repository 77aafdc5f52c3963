"""Prometheus gauges published by the network sampler."""

from prometheus_client import CollectorRegistry, Gauge, generate_latest

RECEIVE = 'receive'
TRANSMIT = 'transmit'


class NetworkGauges:
    """The five interface gauge families, registered on a private registry.

    Using a dedicated registry keeps the default process and platform
    collectors out of the /metrics output.
    """

    def __init__(self, registry: CollectorRegistry = None):
        self.registry = registry or CollectorRegistry()
        # Series currently exported per interface, so they can be removed later
        self._descriptions: dict = {}
        self._with_rates: set = set()

        self.speed_bits = Gauge(
            'network_interface_speed_bits',
            'Network interface speed in bits per second',
            ['interface', 'direction'],
            registry=self.registry
        )
        self.errors = Gauge(
            'network_interface_errors_total',
            'Total number of network interface errors',
            ['interface', 'direction'],
            registry=self.registry
        )
        self.drops = Gauge(
            'network_interface_drops_total',
            'Total number of network interface drops',
            ['interface', 'direction'],
            registry=self.registry
        )
        self.packets = Gauge(
            'network_interface_packets_total',
            'Total number of network interface packets',
            ['interface', 'direction'],
            registry=self.registry
        )
        self.info = Gauge(
            'network_interface_info',
            'Information about network interfaces',
            ['interface', 'description'],
            registry=self.registry
        )

    def set_info(self, interface: str, description: str):
        previous = self._descriptions.get(interface)
        if previous is not None and previous != description:
            self.info.remove(interface, previous)
        self._descriptions[interface] = description
        self.info.labels(interface=interface, description=description).set(1)

    def set_speed(self, interface: str, rx_bits: float, tx_bits: float):
        self._with_rates.add(interface)
        self.speed_bits.labels(interface=interface, direction=RECEIVE).set(rx_bits)
        self.speed_bits.labels(interface=interface, direction=TRANSMIT).set(tx_bits)

    def set_counters(self, interface: str, counters):
        """Publish absolute error, drop and packet counts for both directions."""
        self._with_rates.add(interface)
        for gauge, rx, tx in (
            (self.errors, counters.rx_errors, counters.tx_errors),
            (self.drops, counters.rx_drops, counters.tx_drops),
            (self.packets, counters.rx_packets, counters.tx_packets),
        ):
            gauge.labels(interface=interface, direction=RECEIVE).set(rx)
            gauge.labels(interface=interface, direction=TRANSMIT).set(tx)

    def remove_interface(self, interface: str) -> bool:
        """Drop every series labelled with `interface`.

        Returns False when nothing was published for it.
        """
        description = self._descriptions.pop(interface, None)
        if description is not None:
            self.info.remove(interface, description)

        if interface not in self._with_rates:
            return description is not None
        self._with_rates.discard(interface)

        for gauge in (self.speed_bits, self.errors, self.drops, self.packets):
            for direction in (RECEIVE, TRANSMIT):
                gauge.remove(interface, direction)
        return True

    def render(self) -> bytes:
        """Return the registry in Prometheus text exposition format."""
        return generate_latest(self.registry)
