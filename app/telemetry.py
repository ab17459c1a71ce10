from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from models import db

# The global tracer provider can only be installed once per process.
_provider = None


def _install_provider(app):
    global _provider
    service_name = app.config.get("OTEL_SERVICE_NAME", "mandi-backend")
    endpoint = app.config.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")

    _provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if app.config.get("TESTING"):
        processor = SimpleSpanProcessor(InMemorySpanExporter())
    else:
        processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint))
    _provider.add_span_processor(processor)
    trace.set_tracer_provider(_provider)

    set_global_textmap(TraceContextTextMapPropagator())
    # outbound calls (Twilio SMS) carry the trace context
    RequestsInstrumentor().instrument()
    with app.app_context():
        SQLAlchemyInstrumentor().instrument(engine=db.engine)


def init_tracing(app):
    """Initialize OpenTelemetry tracing for the Flask app."""
    if _provider is None:
        _install_provider(app)
    FlaskInstrumentor().instrument_app(app)
