"""Telemetry and observability for ado-yaml."""

import logging
import os
import time
from contextlib import contextmanager
from typing import Optional

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes

from .config import TelemetryConfig

logger = logging.getLogger(__name__)


class TelemetryManager:
    """
    Manages telemetry for pipeline YAML extraction.

    Provides:
    - Distributed tracing with OpenTelemetry
    - Counters and a duration histogram for extraction runs
    - Error tracking for the tool surface
    """

    def __init__(self, config: TelemetryConfig):
        """
        Initialize telemetry manager.

        Args:
            config: Telemetry configuration
        """
        self.config = config
        self.tracer: Optional[trace.Tracer] = None
        self.meter: Optional[metrics.Meter] = None
        self._initialized = False

        # Metrics
        self._extraction_counter = None
        self._extraction_duration = None
        self._error_counter = None

        if config.enabled:
            self._setup_telemetry()

    def _setup_telemetry(self):
        """Set up OpenTelemetry providers and exporters."""
        try:
            resource = Resource(
                attributes={
                    ResourceAttributes.SERVICE_NAME: self.config.service_name,
                    ResourceAttributes.SERVICE_VERSION: self.config.service_version,
                    ResourceAttributes.PROCESS_PID: os.getpid(),
                }
            )

            self._setup_tracing(resource)

            if self.config.metrics_enabled:
                self._setup_metrics(resource)

            self._initialized = True
            logger.info("Telemetry initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize telemetry: {e}")
            # Telemetry problems never stop extraction
            self.config.enabled = False

    def _setup_tracing(self, resource: Resource):
        """Set up distributed tracing."""
        tracer_provider = TracerProvider(
            resource=resource, sampler=TraceIdRatioBased(self.config.trace_sampling_rate)
        )

        otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT")
        if otlp_endpoint:
            otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
            tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

        trace.set_tracer_provider(tracer_provider)
        self.tracer = trace.get_tracer(__name__)

    def _setup_metrics(self, resource: Resource):
        """Set up metrics collection."""
        otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT")
        if otlp_endpoint:
            metric_exporter = OTLPMetricExporter(endpoint=otlp_endpoint)
            metric_reader = PeriodicExportingMetricReader(
                exporter=metric_exporter,
                export_interval_millis=30000,  # 30 seconds
            )

            meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])

            metrics.set_meter_provider(meter_provider)
            self.meter = metrics.get_meter(__name__)

            self._create_metrics()

    def _create_metrics(self):
        """Create extraction metrics."""
        if not self.meter:
            return

        self._extraction_counter = self.meter.create_counter(
            name="ado_yaml_extractions_total",
            description="Total number of extraction runs",
            unit="1",
        )

        self._extraction_duration = self.meter.create_histogram(
            name="ado_yaml_extraction_duration_seconds",
            description="Duration of extraction runs in seconds",
            unit="s",
        )

        self._error_counter = self.meter.create_counter(
            name="ado_yaml_errors_total",
            description="Total number of errors raised by tool calls",
            unit="1",
        )

    def record_extraction(self, kind: str, result_count: int, duration: float):
        """
        Record a completed extraction run.

        Args:
            kind: Which extractor ran (parameters, stages, tasks)
            result_count: Number of entries returned
            duration: Wall time in seconds
        """
        if not self._initialized:
            return

        if self._extraction_counter:
            self._extraction_counter.add(
                1, {"kind": kind, "empty": str(result_count == 0).lower()}
            )

        if self._extraction_duration:
            self._extraction_duration.record(duration, {"kind": kind})

    @contextmanager
    def trace_tool_call(self, operation: str, **attributes):
        """
        Context manager for tracing tool calls.

        Args:
            operation: Name of the operation
            **attributes: Additional span attributes
        """
        if not self._initialized or not self.tracer:
            yield
            return

        with self.tracer.start_as_current_span(f"ado_yaml_tool_{operation}") as span:
            span.set_attribute("ado_yaml.operation", operation)
            for key, value in attributes.items():
                span.set_attribute(key, value)

            try:
                yield span
            except Exception as e:
                span.record_exception(e)
                span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))

                if self._error_counter:
                    self._error_counter.add(
                        1, {"operation": operation, "error_type": type(e).__name__}
                    )

                raise

    def shutdown(self):
        """Shutdown telemetry providers."""
        if not self._initialized:
            return

        try:
            provider = trace.get_tracer_provider()
            if hasattr(provider, "shutdown"):
                provider.shutdown()

            provider = metrics.get_meter_provider()
            if hasattr(provider, "shutdown"):
                provider.shutdown()

            logger.info("Telemetry shutdown complete")

        except Exception as e:
            logger.error(f"Error during telemetry shutdown: {e}")


# Global telemetry manager instance
_telemetry_manager: Optional[TelemetryManager] = None


def initialize_telemetry(config: TelemetryConfig) -> TelemetryManager:
    """
    Initialize global telemetry manager.

    Args:
        config: Telemetry configuration

    Returns:
        TelemetryManager: Initialized telemetry manager
    """
    global _telemetry_manager
    _telemetry_manager = TelemetryManager(config)
    return _telemetry_manager


def get_telemetry_manager() -> Optional[TelemetryManager]:
    """
    Get the global telemetry manager.

    Returns:
        Optional[TelemetryManager]: The telemetry manager if initialized
    """
    return _telemetry_manager


def shutdown_telemetry():
    """Shutdown the global telemetry manager."""
    global _telemetry_manager
    if _telemetry_manager:
        _telemetry_manager.shutdown()
        _telemetry_manager = None


def record_extraction(kind: str, result_count: int, started_at: float):
    """
    Report a finished extraction run to the global telemetry manager, if any.

    Args:
        kind: Which extractor ran
        result_count: Number of entries returned
        started_at: `time.time()` taken when the run began
    """
    manager = get_telemetry_manager()
    if manager:
        manager.record_extraction(kind, result_count, time.time() - started_at)
