"""InfluxDB client that aggregates firehose metrics and posts them in batches."""

import logging

from influxnozzle.adapters.sinks.http import DEFAULT_TIMEOUT, HttpxMetricsSink
from influxnozzle.config import ClientConfig
from influxnozzle.core.aggregator import Aggregator
from influxnozzle.core.encoding.line_protocol import encode_metrics
from influxnozzle.core.exceptions import MalformedEnvelopeError
from influxnozzle.core.models import Envelope
from influxnozzle.core.ports import MetricsSinkPort

logger = logging.getLogger(__name__)


class InfluxDBClient:
    """Aggregates envelopes and flushes them to an InfluxDB write endpoint.

    Example:
        ```python
        async with InfluxDBClient("http://localhost:8086", "firehose") as client:
            client.add_metric(envelope)
            await client.post_metrics()
        ```
    """

    def __init__(
        self,
        url: str,
        database: str,
        user: str = "",
        password: str = "",
        prefix: str = "",
        deployment: str = "",
        ip: str = "",
        sink: MetricsSinkPort | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            url: Base URL of the database.
            database: Target database name.
            user: Basic auth user, used when no sink is given.
            password: Basic auth password, used when no sink is given.
            prefix: String prepended to every measurement name.
            deployment: Deployment tag for internal metrics.
            ip: IP tag for internal metrics.
            sink: Where batches are posted. Defaults to an HttpxMetricsSink
                owned by this client and closed by aclose().
            timeout: Request timeout for the default sink.
        """
        self.url = url
        self.database = database
        self.prefix = prefix
        self.aggregator = Aggregator(deployment=deployment, ip=ip)
        self._owned_sink: HttpxMetricsSink | None = None
        if sink is None:
            sink = self._owned_sink = HttpxMetricsSink(user, password, timeout)
        self.sink: MetricsSinkPort = sink

    @classmethod
    def from_config(
        cls, config: ClientConfig, sink: MetricsSinkPort | None = None
    ) -> "InfluxDBClient":
        return cls(
            url=config.url,
            database=config.database,
            user=config.user,
            password=config.password,
            prefix=config.prefix,
            deployment=config.deployment,
            ip=config.ip,
            sink=sink,
            timeout=config.timeout,
        )

    async def aclose(self) -> None:
        """Close the default sink. A sink passed in by the caller is left open."""
        if self._owned_sink is not None:
            await self._owned_sink.aclose()

    async def __aenter__(self) -> "InfluxDBClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def total_messages_received(self) -> int:
        return self.aggregator.total_messages_received

    @property
    def total_metrics_sent(self) -> int:
        return self.aggregator.total_metrics_sent

    def add_metric(self, envelope: Envelope) -> None:
        """Aggregate an envelope, skipping it if its payload is missing."""
        try:
            self.aggregator.ingest(envelope)
        except MalformedEnvelopeError as exc:
            logger.warning(
                "Skipping malformed envelope from %s: %s", envelope.origin, exc
            )

    def alert_slow_consumer_error(self) -> None:
        self.aggregator.record_alert()

    def series_url(self) -> str:
        url = f"{self.url}/write?db={self.database}"
        logger.info("Using the following influx URL %s", url)
        return url

    async def post_metrics(self) -> None:
        """Flush the current window to the database.

        Internal metrics are added first. On success the window is cleared
        and the sent counter advances; on failure the window is kept so the
        next flush includes it.

        Raises:
            TransportError: If the sink rejected the batch.
        """
        url = self.series_url()
        self.aggregator.snapshot_internal_metrics()
        logger.info("Posting %d metrics", len(self.aggregator))

        body, metrics_count = encode_metrics(self.aggregator.entries, self.prefix)
        await self.sink.post(url, body)

        self.aggregator.record_sent(metrics_count)
        self.aggregator.reset()
