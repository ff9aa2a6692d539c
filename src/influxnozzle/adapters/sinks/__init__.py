"""Sink adapters implementing MetricsSinkPort."""

from influxnozzle.adapters.sinks.http import HttpxMetricsSink
from influxnozzle.adapters.sinks.in_memory import InMemoryMetricsSink

__all__ = [
    "HttpxMetricsSink",
    "InMemoryMetricsSink",
]
