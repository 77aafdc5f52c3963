"""Shared test fixtures for all test modules."""

import os

# The app module starts its sampler on import unless told otherwise
os.environ.setdefault('START_SAMPLER', 'false')

import pytest

from metrics import NetworkGauges
from sampler import NetworkSampler
from store import InterfaceSample, SampleStore
from tests.helpers import FakeClock, FakeCounterSource, FakeInterfaces


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000.0)


@pytest.fixture
def store(clock) -> SampleStore:
    return SampleStore(clock=clock)


@pytest.fixture
def gauges() -> NetworkGauges:
    return NetworkGauges()


@pytest.fixture
def source() -> FakeCounterSource:
    return FakeCounterSource()


@pytest.fixture
def interfaces() -> FakeInterfaces:
    return FakeInterfaces()


@pytest.fixture
def make_sampler(store, gauges, source, interfaces, clock):
    """Factory fixture building a NetworkSampler wired to the fakes."""

    def _make(**kwargs) -> NetworkSampler:
        return NetworkSampler(
            store,
            gauges,
            read_counters=source,
            get_flags=interfaces.get_flags,
            get_description=interfaces.get_description,
            clock=clock,
            **kwargs
        )

    return _make


@pytest.fixture
def make_sample():
    """Factory fixture for InterfaceSample with zeroed counters."""

    def _make(name, sampled_at=0.0, **counters) -> InterfaceSample:
        fields = dict(
            rx_bytes=0, tx_bytes=0, rx_packets=0, tx_packets=0,
            rx_errors=0, tx_errors=0, rx_drops=0, tx_drops=0,
        )
        fields.update(counters)
        return InterfaceSample(name=name, sampled_at=sampled_at, **fields)

    return _make
