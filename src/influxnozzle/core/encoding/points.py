"""JSON codec for points as [timestamp, value] pairs."""

import json

from influxnozzle.core.models import Point


def encode_point(point: Point) -> str:
    """Encode a point as a JSON array with six decimal places.

    Example:
        >>> encode_point(Point(timestamp=1000, value=3.5))
        '[1000, 3.500000]'
    """
    return f"[{point.timestamp}, {point.value:f}]"


def decode_point(text: str | bytes) -> Point:
    """Decode a JSON [timestamp, value] array into a Point.

    Raises:
        ValueError: If the input is not a two-element array of an integer
            timestamp and a numeric value.
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid point JSON: {exc}") from exc

    if not isinstance(parsed, list) or len(parsed) != 2:
        raise ValueError("expected two parsed values")

    timestamp, value = parsed
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise ValueError(f"timestamp must be an integer, got {timestamp!r}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"value must be a number, got {value!r}")

    return Point(timestamp=timestamp, value=float(value))
