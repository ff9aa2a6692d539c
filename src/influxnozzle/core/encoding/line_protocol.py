"""Line protocol encoder for aggregated series.

Each series renders as one record:

    <prefix><name>,<tags> value=<v>[,value=<v>...] <timestamp-ns>

The comma after the measurement is written even when there are no tags.
"""

import math
import time
from collections.abc import Iterable, Mapping
from decimal import Decimal

from influxnozzle.core.models import MetricKey, MetricValue, Point

_NS_PER_SECOND = 1_000_000_000


def format_float(value: float) -> str:
    """Format a float as the shortest decimal that round-trips.

    Never uses exponent notation; integral values have no decimal point.
    NaN and infinities render as NaN, +Inf and -Inf.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_tags(tags: Iterable[str]) -> str:
    return ",".join(tags)


def format_values(points: Iterable[Point]) -> str:
    return ",".join(f"value={format_float(point.value)}" for point in points)


def format_timestamp(points: list[Point]) -> str:
    """Timestamp of the first point in nanoseconds, or now if empty."""
    if points:
        return str(points[0].timestamp * _NS_PER_SECOND)
    return str(int(time.time()) * _NS_PER_SECOND)


def encode_line(name: str, value: MetricValue, prefix: str = "") -> str:
    """Encode a single series as a newline-terminated record."""
    measurement = f"{prefix}{name},{format_tags(value.tags)}"
    fields = [
        measurement,
        format_values(value.points),
        format_timestamp(value.points),
    ]
    return " ".join(fields) + "\n"


def encode_metrics(
    entries: Mapping[MetricKey, MetricValue], prefix: str = ""
) -> tuple[bytes, int]:
    """Encode all series to a line protocol batch.

    Args:
        entries: Series keyed by identity, rendered in mapping order.
        prefix: String prepended to every measurement name.

    Returns:
        The UTF-8 encoded batch and the number of records in it.
        An empty mapping yields b"" and 0.
    """
    lines = [encode_line(key.name, value, prefix) for key, value in entries.items()]
    return "".join(lines).encode("utf-8"), len(lines)


def _sort_key(key: MetricKey) -> tuple[str, str, str, str, str, str]:
    event_type = key.event_type.value if key.event_type is not None else ""
    return (key.name, event_type, key.deployment, key.job, key.index, key.ip)


def encode_metrics_sorted(
    entries: Mapping[MetricKey, MetricValue], prefix: str = ""
) -> tuple[bytes, int]:
    """Like encode_metrics, but with records ordered by series identity."""
    ordered = {key: entries[key] for key in sorted(entries, key=_sort_key)}
    return encode_metrics(ordered, prefix)
