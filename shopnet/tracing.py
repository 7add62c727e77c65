from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource

# OTLP (OpenTelemetry Protocol) exporter, sends spans to the collector over gRPC
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

_provider = None


def setup_tracing(app):
    """Install an OTLP-exporting tracer provider when OTEL_ENABLED is set.

    The global provider can only be set once per process, so a second app in
    the same interpreter reuses the first one. With tracing disabled the
    OpenTelemetry API hands out no-op tracers.
    """
    global _provider

    if not app.config.get("OTEL_ENABLED"):
        return None

    if _provider is None:
        resource = Resource(attributes={
            "service.name": app.config["OTEL_SERVICE_NAME"]
        })
        _provider = TracerProvider(resource=resource)
        _provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
        trace.set_tracer_provider(_provider)
        app.logger.info(f"Tracing enabled for {app.config['OTEL_SERVICE_NAME']}")

    return _provider


def get_tracer(name):
    return trace.get_tracer(name)
