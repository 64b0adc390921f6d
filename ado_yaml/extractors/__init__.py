"""Line-oriented extractors for Azure DevOps pipeline YAML."""

from .parameters import extract_parameters
from .stages import extract_stage_names, extract_stages
from .tasks import extract_tasks

__all__ = ["extract_parameters", "extract_stages", "extract_stage_names", "extract_tasks"]
