"""
OpenTelemetry Tracing Setup
===========================
Configures tracing for pipeline execution.

Spans are exported over OTLP/HTTP when ENABLE_TRACING=true; otherwise the
global no-op tracer is used and span calls cost next to nothing.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import atexit
import json
import threading
from typing import Any, Mapping, Optional

from loguru import logger
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME

from stepqueue.config import TRACING

# Use centralized config
SERVICE_NAME_VALUE = TRACING.SERVICE_NAME
OTLP_ENDPOINT = TRACING.OTLP_ENDPOINT
ENABLE_TRACING = TRACING.ENABLED

# Track provider for cleanup
_provider: Optional[TracerProvider] = None


def _cleanup_tracing() -> None:
    """Shutdown the tracer provider to flush pending spans."""
    global _provider
    if _provider is not None:
        try:
            _provider.shutdown()
        except Exception as e:
            logger.debug("Tracer provider shutdown failed: {}: {}", type(e).__name__, e)


def setup_tracing(service_name: str = SERVICE_NAME_VALUE) -> trace.Tracer:
    """Install an OTLP-exporting tracer provider and return a tracer from it."""
    global _provider

    _provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    _provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=OTLP_ENDPOINT)))
    trace.set_tracer_provider(_provider)

    # Flush pending spans on interpreter exit
    atexit.register(_cleanup_tracing)

    logger.info(f"Tracing enabled for {service_name} -> {OTLP_ENDPOINT}")
    return trace.get_tracer(service_name)


def get_tracer(name: str = SERVICE_NAME_VALUE) -> trace.Tracer:
    """
    Get a tracer instance for creating spans.

    Args:
        name: Tracer name (usually module or component name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)


def safe_set_span_attributes(span: Any, attributes: Mapping[str, Any]) -> None:
    """Best-effort attribute setter.

    Safe to call when tracing is disabled, when the span is a no-op, or when
    values are not valid OpenTelemetry attribute types. Step names can be any
    hashable value, so non-scalar values are stringified.
    """

    if span is None:
        return

    setter = getattr(span, "set_attribute", None)
    if not callable(setter):
        return

    for key, value in attributes.items():
        if not isinstance(key, str) or not key:
            continue

        try:
            v = value
            if isinstance(v, str):
                setter(key, v[:2048])
                continue

            if isinstance(v, (bool, int, float)):
                setter(key, v)
                continue

            if v is None:
                continue

            if isinstance(v, (list, tuple)):
                trimmed = list(v)[:25]
                # OpenTelemetry arrays must hold a single scalar type
                scalar_ok = all(isinstance(x, (str, bool, int, float)) for x in trimmed) and len(
                    {type(x) for x in trimmed}
                ) <= 1
                if scalar_ok:
                    setter(key, [x[:256] if isinstance(x, str) else x for x in trimmed])
                else:
                    setter(key, [str(x)[:256] for x in trimmed])
                continue

            if isinstance(v, dict):
                try:
                    setter(key, json.dumps(v, sort_keys=True, default=str)[:2048])
                except (TypeError, ValueError):
                    setter(key, str(v)[:2048])
                continue

            setter(key, repr(v)[:2048])
        except Exception:
            # Never break pipelines due to tracing.
            continue


_tracer = None
_tracer_lock = threading.Lock()


def init_tracing() -> trace.Tracer:
    """
    Initialize tracing if not already done.

    Safe to call from concurrent executions; the provider is installed once.

    Returns:
        The global tracer instance (or NoOp tracer if disabled)
    """
    global _tracer
    if _tracer is not None:
        return _tracer
    with _tracer_lock:
        if _tracer is None:
            if ENABLE_TRACING:
                _tracer = setup_tracing()
            else:
                _tracer = trace.get_tracer(SERVICE_NAME_VALUE)
    return _tracer
