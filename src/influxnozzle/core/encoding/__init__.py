"""Encoders for aggregated series."""

from influxnozzle.core.encoding.line_protocol import (
    encode_metrics,
    encode_metrics_sorted,
    format_float,
)
from influxnozzle.core.encoding.points import decode_point, encode_point

__all__ = [
    "decode_point",
    "encode_metrics",
    "encode_metrics_sorted",
    "encode_point",
    "format_float",
]
