"""Asyncio runtime that feeds envelopes to a client and flushes on a timer.

Ingestion and flushing share one lock, so a batch is never rendered or
reset while an envelope is being added.
"""

import asyncio
import logging
from collections.abc import AsyncIterable

from influxnozzle.client import InfluxDBClient
from influxnozzle.core.exceptions import TransportError
from influxnozzle.core.models import Envelope

logger = logging.getLogger(__name__)


class Nozzle:
    """Drives an InfluxDBClient from an async envelope source.

    Args:
        client: Client that aggregates and posts metrics.
        flush_interval: Seconds between flushes.
    """

    def __init__(self, client: InfluxDBClient, flush_interval: float = 15.0) -> None:
        self.client = client
        self.flush_interval = flush_interval
        self._lock = asyncio.Lock()
        self._stop = asyncio.Event()

    async def consume(self, envelopes: AsyncIterable[Envelope]) -> None:
        """Ingest envelopes until the source ends or stop() is called."""
        async for envelope in envelopes:
            async with self._lock:
                self.client.add_metric(envelope)
            if self._stop.is_set():
                break

    async def flush(self) -> bool:
        """Run one flush cycle.

        Returns:
            True if the batch was accepted. Transport failures are logged
            and the window is kept for the next attempt.
        """
        async with self._lock:
            try:
                await self.client.post_metrics()
            except TransportError as exc:
                logger.error("Error posting metrics to InfluxDB: %s", exc)
                return False
        return True

    async def _flush_periodically(self) -> None:
        while not self._stop.is_set():
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.flush_interval)
            except asyncio.TimeoutError:
                await self.flush()

    def alert_slow_consumer(self) -> None:
        """Flag a slow consumer in the next batch."""
        self.client.alert_slow_consumer_error()

    def stop(self) -> None:
        """Ask run() to stop consuming, flush once more and close the client."""
        self._stop.set()

    async def run(self, envelopes: AsyncIterable[Envelope]) -> None:
        """Consume envelopes and flush periodically until stopped.

        Returns when the source is exhausted or stop() is called, even if the
        source is idle. A final flush runs before the client is closed.
        Errors raised by the source are re-raised after the final flush.
        """
        self._stop.clear()
        flusher = asyncio.create_task(self._flush_periodically())
        consumer = asyncio.create_task(self.consume(envelopes))
        stopper = asyncio.create_task(self._stop.wait())
        try:
            await asyncio.wait(
                {consumer, stopper}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            self._stop.set()
            consumer.cancel()
            await asyncio.gather(consumer, stopper, flusher, return_exceptions=True)

        try:
            await self.flush()
        finally:
            await self.client.aclose()

        for task in (consumer, flusher):
            if not task.cancelled():
                task.result()
