"""In-memory aggregation of firehose envelopes into series."""

import time
from collections.abc import Mapping

from influxnozzle.core.exceptions import MalformedEnvelopeError
from influxnozzle.core.models import (
    Envelope,
    EventType,
    MetricKey,
    MetricValue,
    Point,
)

NANOSECONDS_PER_SECOND = 1_000_000_000

TOTAL_MESSAGES_RECEIVED = "totalMessagesReceived"
TOTAL_METRICS_SENT = "totalMetricsSent"
SLOW_CONSUMER_ALERT = "slowConsumerAlert"

_AGGREGATED_TYPES = frozenset({EventType.VALUE_METRIC, EventType.COUNTER_EVENT})


def _truncate_to_seconds(nanoseconds: int) -> int:
    """Convert nanoseconds to whole seconds, truncating toward zero."""
    seconds = abs(nanoseconds) // NANOSECONDS_PER_SECOND
    return -seconds if nanoseconds < 0 else seconds


def _append_tag_if_not_empty(tags: list[str], key: str, value: str) -> None:
    if value:
        tags.append(f"{key}={value}")


def envelope_tags(envelope: Envelope) -> list[str]:
    """Build the tag list for a data envelope.

    Tags appear in the order deployment, job, index, ip. Empty fields
    are skipped.
    """
    tags: list[str] = []
    _append_tag_if_not_empty(tags, "deployment", envelope.deployment)
    _append_tag_if_not_empty(tags, "job", envelope.job)
    _append_tag_if_not_empty(tags, "index", envelope.index)
    _append_tag_if_not_empty(tags, "ip", envelope.ip)
    return tags


def _name_and_value(envelope: Envelope) -> tuple[str, float]:
    if envelope.event_type is EventType.VALUE_METRIC:
        if envelope.value_metric is None:
            raise MalformedEnvelopeError(
                envelope, "ValueMetric envelope has no value_metric payload"
            )
        metric = envelope.value_metric
        return f"{envelope.origin}.{metric.name}", float(metric.value)

    if envelope.counter_event is None:
        raise MalformedEnvelopeError(
            envelope, "CounterEvent envelope has no counter_event payload"
        )
    counter = envelope.counter_event
    return f"{envelope.origin}.{counter.name}", float(counter.total)


class Aggregator:
    """Accumulates metric envelopes for one flush window.

    Holds the series mapping for the current window together with two
    counters that survive across windows. Not thread-safe: callers that
    ingest and flush from different tasks must serialize access.

    Args:
        deployment: Deployment tag applied to internal metrics.
        ip: IP tag applied to internal metrics.
    """

    def __init__(self, deployment: str = "", ip: str = "") -> None:
        self.deployment = deployment
        self.ip = ip
        self.total_messages_received = 0
        self.total_metrics_sent = 0
        self._entries: dict[MetricKey, MetricValue] = {}

    @property
    def entries(self) -> Mapping[MetricKey, MetricValue]:
        """Series accumulated in the current window."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def ingest(self, envelope: Envelope) -> bool:
        """Add an envelope to the current window.

        Every envelope counts towards total_messages_received. Only value
        metrics and counter events are aggregated; other kinds are dropped.

        Returns:
            True if the envelope was aggregated, False if it was dropped.

        Raises:
            MalformedEnvelopeError: If a metric envelope lacks its payload.
                The window is left unchanged.
        """
        self.total_messages_received += 1
        if envelope.event_type not in _AGGREGATED_TYPES:
            return False

        name, value = _name_and_value(envelope)
        key = MetricKey(
            event_type=envelope.event_type,
            name=name,
            deployment=envelope.deployment,
            job=envelope.job,
            index=envelope.index,
            ip=envelope.ip,
        )

        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = MetricValue()
        entry.tags = envelope_tags(envelope)
        entry.points.append(
            Point(timestamp=_truncate_to_seconds(envelope.timestamp), value=value)
        )
        return True

    def _internal_key(self, name: str) -> MetricKey:
        return MetricKey(
            event_type=None, name=name, deployment=self.deployment, ip=self.ip
        )

    def add_internal_metric(self, name: str, value: int) -> None:
        """Replace an internal metric with a single point stamped now."""
        self._entries[self._internal_key(name)] = MetricValue(
            tags=[f"ip={self.ip}", f"deployment={self.deployment}"],
            points=[Point(timestamp=int(time.time()), value=float(value))],
        )

    def record_alert(self) -> None:
        """Flag a slow consumer for the current window."""
        self.add_internal_metric(SLOW_CONSUMER_ALERT, 1)

    def has_slow_consumer_alert(self) -> bool:
        return self._internal_key(SLOW_CONSUMER_ALERT) in self._entries

    def snapshot_internal_metrics(self) -> None:
        """Add the self-health metrics to the current window.

        An alert recorded earlier in the window is left in place; otherwise
        a healthy slowConsumerAlert=0 is added.
        """
        self.add_internal_metric(TOTAL_MESSAGES_RECEIVED, self.total_messages_received)
        self.add_internal_metric(TOTAL_METRICS_SENT, self.total_metrics_sent)
        if not self.has_slow_consumer_alert():
            self.add_internal_metric(SLOW_CONSUMER_ALERT, 0)

    def record_sent(self, count: int) -> None:
        self.total_metrics_sent += count

    def reset(self) -> None:
        """Start a new window. Cumulative counters are kept."""
        self._entries = {}
