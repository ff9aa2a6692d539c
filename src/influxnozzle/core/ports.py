"""Port interfaces for sink adapters.

The client depends only on this protocol, not on a concrete HTTP library.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsSinkPort(Protocol):
    """Port for delivering a serialized batch to a time-series database.

    Examples: HttpxMetricsSink, InMemoryMetricsSink.
    """

    async def post(self, url: str, body: bytes) -> None:
        """Post a batch of line-protocol records.

        Args:
            url: Full write URL, including the database query parameter.
            body: Newline-terminated line-protocol records.

        Raises:
            TransportError: If the batch was not accepted.
        """
        ...
