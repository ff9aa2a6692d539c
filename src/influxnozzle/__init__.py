"""Aggregate firehose metrics and post them to InfluxDB."""

from influxnozzle.adapters.sinks import HttpxMetricsSink, InMemoryMetricsSink
from influxnozzle.client import InfluxDBClient
from influxnozzle.config import ClientConfig
from influxnozzle.core.aggregator import Aggregator
from influxnozzle.core.encoding import (
    decode_point,
    encode_metrics,
    encode_point,
)
from influxnozzle.core.exceptions import (
    InfluxNozzleError,
    MalformedEnvelopeError,
    TransportError,
)
from influxnozzle.core.models import (
    CounterEvent,
    Envelope,
    EventType,
    MetricKey,
    MetricValue,
    Point,
    ValueMetric,
)
from influxnozzle.core.ports import MetricsSinkPort
from influxnozzle.runtime import Nozzle

__all__ = [
    "Aggregator",
    "ClientConfig",
    "CounterEvent",
    "Envelope",
    "EventType",
    "HttpxMetricsSink",
    "InMemoryMetricsSink",
    "InfluxDBClient",
    "InfluxNozzleError",
    "MalformedEnvelopeError",
    "MetricKey",
    "MetricValue",
    "MetricsSinkPort",
    "Nozzle",
    "Point",
    "TransportError",
    "ValueMetric",
    "decode_point",
    "encode_metrics",
    "encode_point",
]
