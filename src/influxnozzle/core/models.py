"""Core domain models for firehose envelopes and aggregated series."""

from dataclasses import dataclass, field
from enum import Enum


class EventType(Enum):
    """Kind of event carried by an envelope."""

    HTTP_START_STOP = "HttpStartStop"
    LOG_MESSAGE = "LogMessage"
    VALUE_METRIC = "ValueMetric"
    COUNTER_EVENT = "CounterEvent"
    ERROR = "Error"
    CONTAINER_METRIC = "ContainerMetric"


@dataclass(frozen=True)
class ValueMetric:
    """An instantaneous measurement.

    Attributes:
        name: Metric name (e.g., memoryStats.numBytesAllocated).
        value: The measured value.
        unit: Unit of the value (e.g., bytes, ms).
    """

    name: str
    value: float
    unit: str = ""


@dataclass(frozen=True)
class CounterEvent:
    """An increment to a monotonic counter.

    Attributes:
        name: Counter name (e.g., dropsondeListener.receivedMessageCount).
        delta: Amount added since the previous event.
        total: Cumulative value of the counter.
    """

    name: str
    delta: int
    total: int


@dataclass(frozen=True)
class Envelope:
    """A single inbound event from the firehose.

    Attributes:
        origin: Component that emitted the event (e.g., DopplerServer).
        event_type: Kind of payload carried.
        timestamp: Unix timestamp in nanoseconds.
        deployment: Deployment name of the emitting VM.
        job: Job name of the emitting VM.
        index: Instance index of the emitting VM.
        ip: IP address of the emitting VM.
        value_metric: Payload when event_type is VALUE_METRIC.
        counter_event: Payload when event_type is COUNTER_EVENT.
    """

    origin: str
    event_type: EventType
    timestamp: int = 0
    deployment: str = ""
    job: str = ""
    index: str = ""
    ip: str = ""
    value_metric: ValueMetric | None = None
    counter_event: CounterEvent | None = None


@dataclass(frozen=True)
class MetricKey:
    """Identity of an aggregated series.

    Two envelopes with equal keys accumulate into the same series.
    Internal metrics have no event type and no job or index.
    """

    event_type: EventType | None
    name: str
    deployment: str = ""
    job: str = ""
    index: str = ""
    ip: str = ""


@dataclass(frozen=True)
class Point:
    """A single observation.

    Attributes:
        timestamp: Unix timestamp in whole seconds.
        value: The observed value.
    """

    timestamp: int
    value: float


@dataclass
class MetricValue:
    """Accumulated state for one series within a flush window.

    Tags are replaced on every ingest; points only ever grow.
    """

    tags: list[str] = field(default_factory=list)
    points: list[Point] = field(default_factory=list)
