"""Combined view of everything extracted from one pipeline definition."""

import logging

from opentelemetry import trace

from .extractors import extract_parameters, extract_stages, extract_tasks
from .models import PipelineOutline

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def analyze_pipeline(yaml_text: str) -> PipelineOutline:
    """
    Run every extractor over the same pipeline text.

    Args:
        yaml_text (str): The full text of a pipeline definition.

    Returns:
        PipelineOutline: Parameters, stages and tasks found in the text.
    """
    with tracer.start_as_current_span("ado_yaml_analyze_pipeline") as span:
        outline = PipelineOutline(
            parameters=extract_parameters(yaml_text),
            stages=extract_stages(yaml_text),
            tasks=extract_tasks(yaml_text),
        )
        span.set_attribute("ado_yaml.parameters_count", len(outline.parameters))
        span.set_attribute("ado_yaml.stages_count", len(outline.stages))
        span.set_attribute("ado_yaml.tasks_count", len(outline.tasks))
        return outline
