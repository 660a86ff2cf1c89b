"""
ZEE Search Service - Tracing

OpenTelemetry provider set up once when ``ZEE_TRACING_ENABLED`` is on. The
only manual span is ``search.aggregate``; until configured, ``get_tracer``
hands out the no-op tracer, so instrumented code runs unchanged.
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

_configured: bool = False


def build_tracer_provider(
    service_name: str,
    service_version: str,
    console_export: bool = False,
) -> TracerProvider:
    resource = Resource.create(
        {"service.name": service_name, "service.version": service_version}
    )
    provider = TracerProvider(resource=resource)
    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    return provider


def configure_tracing(
    service_name: str,
    service_version: str,
    console_export: bool = False,
) -> None:
    """Install the global tracer provider; later calls are no-ops.

    Args:
        service_name: ``service.name`` resource attribute
        service_version: ``service.version`` resource attribute
        console_export: Print finished spans to stdout (``ZEE_TRACING_CONSOLE_EXPORT``)
    """
    global _configured

    if _configured:
        return

    trace.set_tracer_provider(
        build_tracer_provider(service_name, service_version, console_export)
    )
    _configured = True


def get_tracer(name: str) -> Any:
    return trace.get_tracer(name)


def reset_tracing() -> None:
    """Forget the configuration (tests only).

    The OpenTelemetry global provider can only be set once per process; this
    clears our flag, not the installed provider.
    """
    global _configured
    _configured = False
