"""Shared test fixtures for all test modules."""

from collections.abc import Callable

import pytest

from influxnozzle.adapters.sinks.in_memory import InMemoryMetricsSink
from influxnozzle.client import InfluxDBClient
from influxnozzle.core.models import CounterEvent, Envelope, EventType, ValueMetric

EnvelopeFactory = Callable[..., Envelope]


@pytest.fixture
def value_envelope() -> EnvelopeFactory:
    """Factory fixture for ValueMetric envelopes.

    Defaults describe a router VM; any field can be overridden.
    """

    def _envelope(
        name: str = "latency",
        value: float = 3.5,
        timestamp: int = 1_000_000_000_000,
        origin: str = "router",
        deployment: str = "cf",
        job: str = "router_z1",
        index: str = "0",
        ip: str = "10.0.0.1",
    ) -> Envelope:
        return Envelope(
            origin=origin,
            event_type=EventType.VALUE_METRIC,
            timestamp=timestamp,
            deployment=deployment,
            job=job,
            index=index,
            ip=ip,
            value_metric=ValueMetric(name=name, value=value, unit="ms"),
        )

    return _envelope


@pytest.fixture
def counter_envelope() -> EnvelopeFactory:
    """Factory fixture for CounterEvent envelopes."""

    def _envelope(
        name: str = "requests",
        total: int = 42,
        delta: int = 1,
        timestamp: int = 1_000_000_000_000,
        origin: str = "router",
        deployment: str = "cf",
        job: str = "router_z1",
        index: str = "0",
        ip: str = "10.0.0.1",
    ) -> Envelope:
        return Envelope(
            origin=origin,
            event_type=EventType.COUNTER_EVENT,
            timestamp=timestamp,
            deployment=deployment,
            job=job,
            index=index,
            ip=ip,
            counter_event=CounterEvent(name=name, delta=delta, total=total),
        )

    return _envelope


@pytest.fixture
def memory_sink() -> InMemoryMetricsSink:
    return InMemoryMetricsSink()


@pytest.fixture
def client(memory_sink: InMemoryMetricsSink) -> InfluxDBClient:
    """Client wired to an in-memory sink."""
    return InfluxDBClient(
        url="http://influx.example:8086",
        database="firehose",
        prefix="cf.",
        deployment="nozzle",
        ip="10.0.0.99",
        sink=memory_sink,
    )
