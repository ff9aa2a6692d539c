"""Runtime wiring for consuming envelopes and flushing on a timer."""

from influxnozzle.runtime.nozzle import Nozzle

__all__ = ["Nozzle"]
