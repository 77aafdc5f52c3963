"""Kernel interface data sources for the network sampler."""

from .network import CounterSourceError, InterfaceCounters, read_net_dev, parse_net_dev_line
from .interfaces import (
    InterfaceFlags,
    InterfaceLookupError,
    get_interface_flags,
    get_interface_description,
)

__all__ = [
    'CounterSourceError',
    'InterfaceCounters',
    'read_net_dev',
    'parse_net_dev_line',
    'InterfaceFlags',
    'InterfaceLookupError',
    'get_interface_flags',
    'get_interface_description',
]
