"""Interface flags and descriptions from /sys/class/net."""

import os
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Support both native and Docker-mounted paths
SYS_BASE = '/host/sys' if os.path.exists('/host/sys') else '/sys'

# Flag bits from linux/if.h
IFF_UP = 0x1
IFF_LOOPBACK = 0x8

DEFAULT_DESCRIPTION = 'Unknown'


class InterfaceLookupError(Exception):
    """Raised when an interface's metadata cannot be resolved."""


@dataclass(frozen=True)
class InterfaceFlags:
    up: bool
    loopback: bool


def get_interface_flags(name: str, sys_base: str = None) -> InterfaceFlags:
    """Read the administrative up and loopback flags of an interface."""
    path = os.path.join(sys_base or SYS_BASE, 'class', 'net', name, 'flags')
    try:
        with open(path, 'r') as f:
            flags = int(f.read().strip(), 16)
    except (OSError, ValueError) as e:
        raise InterfaceLookupError(f"Cannot read flags for {name}: {e}") from e

    return InterfaceFlags(
        up=bool(flags & IFF_UP),
        loopback=bool(flags & IFF_LOOPBACK)
    )


def get_interface_description(name: str, sys_base: str = None) -> str:
    """Return the interface alias, or DEFAULT_DESCRIPTION when none is set."""
    path = os.path.join(sys_base or SYS_BASE, 'class', 'net', name, 'ifalias')
    try:
        with open(path, 'r') as f:
            description = f.read().strip()
    except OSError as e:
        logger.debug(f"No alias for {name}: {e}")
        return DEFAULT_DESCRIPTION

    return description or DEFAULT_DESCRIPTION
