"""In-memory sink adapter."""

from influxnozzle.core.exceptions import TransportError


class InMemoryMetricsSink:
    """In-memory implementation of MetricsSinkPort.

    Records every posted batch. Suitable for testing and for embedding
    where batches are consumed in-process. Set ``fail_with`` to make
    posts fail with a TransportError.
    """

    def __init__(self) -> None:
        self.posts: list[tuple[str, bytes]] = []
        self.fail_with: str | None = None

    async def post(self, url: str, body: bytes) -> None:
        """Record a batch, or raise if configured to fail."""
        if self.fail_with is not None:
            raise TransportError(self.fail_with)
        self.posts.append((url, body))

    @property
    def lines(self) -> list[str]:
        """All records posted so far, without trailing newlines."""
        return [
            line
            for _, body in self.posts
            for line in body.decode("utf-8").splitlines()
        ]
