"""BDD step definitions for the flush cycle feature."""

import pytest
from pytest_bdd import given, parsers, then, when
from tests.features.flush.steps_helpers import FlushScenarioContext, run_async

from influxnozzle.client import InfluxDBClient
from influxnozzle.core.exceptions import TransportError
from influxnozzle.core.models import Envelope, EventType, ValueMetric


@pytest.fixture
def ctx() -> FlushScenarioContext:
    """Fresh scenario context for each test."""
    return FlushScenarioContext()


# === Given ===
@given(
    parsers.parse('a client with prefix "{prefix}" for deployment "{deployment}" at "{ip}"')
)
def step_client(ctx: FlushScenarioContext, prefix: str, deployment: str, ip: str) -> None:
    ctx.client = InfluxDBClient(
        url="http://influx.example:8086",
        database="firehose",
        prefix=prefix,
        deployment=deployment,
        ip=ip,
        sink=ctx.sink,
    )


@given("the database rejects writes")
def step_rejects_writes(ctx: FlushScenarioContext) -> None:
    ctx.sink.fail_with = "InfluxDB request returned HTTP response: 500"


# === When ===
@when(parsers.parse('a value metric "{name}" of {value:g} from "{origin}" is ingested'))
def step_ingest_value(ctx: FlushScenarioContext, name: str, value: float, origin: str) -> None:
    assert ctx.client is not None
    ctx.client.add_metric(
        Envelope(
            origin=origin,
            event_type=EventType.VALUE_METRIC,
            timestamp=1_000_000_000_000,
            deployment="cf",
            job="router_z1",
            index="0",
            ip="10.0.0.1",
            value_metric=ValueMetric(name=name, value=value),
        )
    )


@when("a slow consumer alert is recorded")
def step_record_alert(ctx: FlushScenarioContext) -> None:
    assert ctx.client is not None
    ctx.client.alert_slow_consumer_error()


@when("the client flushes")
def step_flush(ctx: FlushScenarioContext) -> None:
    assert ctx.client is not None
    try:
        run_async(ctx.client.post_metrics())
    except TransportError as exc:
        ctx.error = exc


# === Then ===
@then(parsers.parse('the batch contains "{line}"'))
def step_batch_contains(ctx: FlushScenarioContext, line: str) -> None:
    assert line in ctx.last_batch


@then(parsers.parse("the batch has {count:d} records"))
def step_batch_count(ctx: FlushScenarioContext, count: int) -> None:
    assert len(ctx.last_batch) == count


@then("the window is empty")
def step_window_empty(ctx: FlushScenarioContext) -> None:
    assert ctx.client is not None
    assert len(ctx.client.aggregator) == 0


@then(parsers.parse('the internal metric "{name}" is {value:d}'))
def step_internal_metric(ctx: FlushScenarioContext, name: str, value: int) -> None:
    assert ctx.client is not None
    matching = [
        line for line in ctx.last_batch if line.startswith(f"{ctx.client.prefix}{name},")
    ]
    assert len(matching) == 1
    assert matching[0].split(" ")[1] == f"value={value}"


@then("the flush failed")
def step_flush_failed(ctx: FlushScenarioContext) -> None:
    assert ctx.error is not None
    assert ctx.sink.posts == []


@then(parsers.parse("the window holds {count:d} series"))
def step_window_holds(ctx: FlushScenarioContext, count: int) -> None:
    assert ctx.client is not None
    assert len(ctx.client.aggregator) == count


@then(parsers.parse("the total metrics sent is {count:d}"))
def step_total_sent(ctx: FlushScenarioContext, count: int) -> None:
    assert ctx.client is not None
    assert ctx.client.total_metrics_sent == count
