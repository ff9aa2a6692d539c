"""Exceptions raised by influxnozzle."""


class InfluxNozzleError(Exception):
    """Base class for all influxnozzle errors."""


class MalformedEnvelopeError(InfluxNozzleError):
    """A metric envelope is missing the payload its event type requires."""

    def __init__(self, envelope: object, message: str) -> None:
        super().__init__(message)
        self.envelope = envelope


class TransportError(InfluxNozzleError):
    """Posting a batch to the database failed.

    Attributes:
        status_code: HTTP status of the response, or None when no
            response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
