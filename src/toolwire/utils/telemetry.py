"""OpenTelemetry tracing for toolwire.

Instrumented code asks for a tracer with :func:`get_tracer` and always
gets one: without a configured SDK the API hands out no-op spans.

``toolwire serve --telemetry`` calls :func:`configure_telemetry` once at
startup (``pip install toolwire[otel]``). Spans go to an OTLP collector
when an endpoint is configured and to stderr otherwise, never to stdout,
which carries the protocol stream.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

ATTR_RPC_METHOD = "toolwire.rpc.method"
ATTR_RPC_ID = "toolwire.rpc.id"
ATTR_RPC_ERROR_CODE = "toolwire.rpc.error_code"
ATTR_TOOL_NAME = "toolwire.tool.name"
ATTR_TOOL_SUCCESS = "toolwire.tool.success"

_INSTRUMENTATION_NAME = "toolwire"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(*, service_name: str = "toolwire", otlp_endpoint: str | None = None) -> None:
    """Install an SDK tracer provider for *service_name*.

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, with *otlp_endpoint*,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
    except ImportError as exc:
        raise ImportError(
            "opentelemetry-sdk is required for tracing; install toolwire[otel]"
        ) from exc

    if otlp_endpoint:
        processor = BatchSpanProcessor(_otlp_exporter(otlp_endpoint))
    else:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter

        processor = SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr))

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    except ImportError as exc:
        raise ImportError(
            "opentelemetry-exporter-otlp is required for OTLP export; install toolwire[otel]"
        ) from exc
    return OTLPSpanExporter(endpoint=endpoint)
