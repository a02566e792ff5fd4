# =============================================================================
# lib/tracing.py - Distributed Tracing
# =============================================================================
# OpenTelemetry setup and explicit trace-context passing.
#
# - configure_tracing(): builds the TracerProvider (always-sample, Zipkin
#   JSON export to the Jaeger/Zipkin collector)
# - TracingPropagator: extracts the inbound context, opens child spans and
#   injects B3 headers into outbound requests
#
# Nothing here touches the global tracer provider or global propagator.
# Components receive a TracingPropagator and an OpenTelemetry Context as
# parameters, so every span's parent is visible at the call site.
#
# Usage:
#   tracing = TracingPropagator(provider.get_tracer("playlists-api"))
#   parent = tracing.extract(request.headers)
#   with tracing.span("/ GET", parent, kind=SpanKind.SERVER) as (span, ctx):
#       headers = {}
#       tracing.inject(ctx, headers)
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.propagators.b3 import B3MultiFormat
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from app.config import Settings

logger = logging.getLogger(__name__)


# =============================================================================
# Provider Setup
# =============================================================================

def configure_tracing(settings: Settings) -> TracerProvider:
    """
    Build the tracer provider for this process.

    Every trace is sampled. Finished spans are batched to the collector at
    settings.zipkin_endpoint and, with TRACING_LOG_SPANS, also printed.

    Args:
        settings: Application settings

    Returns:
        TracerProvider: Call shutdown() on exit to flush pending spans
    """
    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: settings.SERVICE_NAME}),
        sampler=ALWAYS_ON,
    )
    provider.add_span_processor(
        BatchSpanProcessor(ZipkinExporter(endpoint=settings.zipkin_endpoint))
    )
    if settings.TRACING_LOG_SPANS:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    logger.info(f"Tracing spans exported to {settings.zipkin_endpoint}")
    return provider


def mark_error(
    span: Span,
    exc: BaseException | None = None,
    message: str | None = None,
) -> None:
    """
    Flag a span as failed.

    Sets the conventional `error=true` tag (what Jaeger and Zipkin UIs key
    on), the OpenTelemetry ERROR status, and records the exception if given.
    """
    span.set_attribute("error", True)
    description = message or (str(exc) if exc is not None else None)
    span.set_status(Status(StatusCode.ERROR, description))
    if exc is not None:
        span.record_exception(exc)


# =============================================================================
# Context Propagation
# =============================================================================

class TracingPropagator:
    """
    Span factory plus B3 header propagation.

    Shared by every request; holds no per-request state.
    """

    def __init__(
        self,
        tracer: trace.Tracer,
        propagator: TextMapPropagator | None = None,
    ):
        self._tracer = tracer
        self._propagator = propagator or B3MultiFormat()

    def extract(self, headers: Mapping[str, str]) -> Context:
        """
        Read the caller's trace context from inbound headers.

        Returns an empty Context when the headers carry none, so the root
        span starts a fresh trace.
        """
        return self._propagator.extract(headers, context=Context())

    def inject(self, context: Context, headers: MutableMapping[str, str]) -> None:
        """Write the active span of `context` into outbound headers."""
        self._propagator.inject(headers, context=context)

    @contextmanager
    def span(
        self,
        name: str,
        parent: Context,
        kind: SpanKind = SpanKind.INTERNAL,
    ) -> Iterator[tuple[Span, Context]]:
        """
        Open a child span of `parent`.

        Yields the span and a Context holding it, to hand to callees.
        The span is ended exactly once when the block exits, however it
        exits. An exception escaping the block marks the span errored.
        """
        span = self._tracer.start_span(
            name,
            context=parent,
            kind=kind,
            record_exception=False,
            set_status_on_exception=False,
        )
        try:
            yield span, trace.set_span_in_context(span, parent)
        except Exception as e:
            mark_error(span, e)
            raise
        finally:
            span.end()
