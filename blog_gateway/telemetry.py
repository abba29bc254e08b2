"""OpenTelemetry instruments for the batching and transaction layers.

The instruments are created against the global providers; until
``setup_telemetry`` installs real providers the API hands out no-op proxies,
so recording is always safe.
"""

import logging

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from blog_gateway.core.config import settings

logger = logging.getLogger(__name__)

SERVICE = "BlogGateway"

tracer = trace.get_tracer("blog_gateway")
meter = metrics.get_meter("blog_gateway")

batch_counter = meter.create_counter(
    "loader.batches",
    unit="{batch}",
    description="Batches dispatched by relation loaders",
)
batch_size_histogram = meter.create_histogram(
    "loader.batch.size",
    unit="{key}",
    description="Keys per dispatched batch",
)
chunk_counter = meter.create_counter(
    "loader.chunks",
    unit="{query}",
    description="Chunked bulk queries issued by relation loaders",
)
bulk_fetch_duration = meter.create_histogram(
    "loader.bulk_fetch.duration",
    unit="s",
    description="Wall time of one bulk-fetch invocation",
)
transaction_counter = meter.create_counter(
    "db.transactions",
    unit="{transaction}",
    description="Request transactions by outcome",
)


def record_batch(loader: str, size: int) -> None:
    attributes = {"loader": loader}
    batch_counter.add(1, attributes)
    batch_size_histogram.record(size, attributes)


def record_chunks(loader: str, count: int) -> None:
    chunk_counter.add(count, {"loader": loader})


def record_bulk_fetch(loader: str, seconds: float) -> None:
    bulk_fetch_duration.record(seconds, {"loader": loader})


def record_transaction(outcome: str) -> None:
    transaction_counter.add(1, {"outcome": outcome})


def setup_telemetry(app: FastAPI):
    if not settings.OPENTELEMETRY_ENABLED:
        logger.info("OpenTelemetry is disabled via OPENTELEMETRY_ENABLED setting.")
        return

    logger.info("Setting up OpenTelemetry")
    resource = Resource(attributes={SERVICE_NAME: SERVICE})
    tracer_provider = TracerProvider(resource=resource)

    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT.strip("/")
        logger.info(f"Configuring OTLP exporters to: {endpoint}")
        span_exporter = OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces")
        metric_exporter = OTLPMetricExporter(endpoint=f"{endpoint}/v1/metrics")
    else:
        logger.warning(
            "OTEL_EXPORTER_OTLP_ENDPOINT not set. Defaulting to console exporters."
        )
        span_exporter = ConsoleSpanExporter()
        metric_exporter = ConsoleMetricExporter()

    tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))
    trace.set_tracer_provider(tracer_provider)
    metrics.set_meter_provider(
        MeterProvider(
            resource=resource,
            metric_readers=[PeriodicExportingMetricReader(metric_exporter)],
        )
    )

    FastAPIInstrumentor.instrument_app(app)
    logger.info("OpenTelemetry setup complete.")
