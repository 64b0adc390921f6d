import logging
from contextlib import nullcontext
from typing import Any

from ado_yaml.config import AdoYamlConfig
from ado_yaml.extractors import extract_parameters, extract_stages, extract_tasks
from ado_yaml.loader import load_pipeline_text
from ado_yaml.outline import analyze_pipeline
from ado_yaml.run_options import build_run_options
from ado_yaml.telemetry import get_telemetry_manager

logger = logging.getLogger(__name__)


def register_extract_tools(mcp_instance, config: AdoYamlConfig):
    """
    Registers pipeline YAML extraction tools with the FastMCP instance.

    Args:
        mcp_instance: The FastMCP instance to register tools with.
        config (AdoYamlConfig): Settings used when tools read files from disk.
    """

    def traced(operation: str, **attributes):
        """Trace a tool call when telemetry is running."""
        manager = get_telemetry_manager()
        if manager is None:
            return nullcontext()
        return manager.trace_tool_call(operation, **attributes)

    @mcp_instance.tool
    def extract_pipeline_parameters(yaml_text: str) -> list[dict[str, Any]]:
        """
        Extracts the runtime parameters declared in a pipeline's `parameters:` block.

        Args:
            yaml_text (str): The full text of the pipeline YAML file.

        Returns:
            List[dict]: One entry per parameter with name, type and, when declared,
            displayName, default and values.
        """
        with traced("extract_pipeline_parameters"):
            return [p.model_dump(exclude_none=True) for p in extract_parameters(yaml_text)]

    @mcp_instance.tool
    def extract_pipeline_stages(yaml_text: str) -> list[dict[str, Any]]:
        """
        Extracts stage names and their dependsOn lists from pipeline YAML.

        A stage without dependsOn has no dependsOn key; Azure Pipelines then runs it
        after the previous stage.

        Args:
            yaml_text (str): The full text of the pipeline YAML file.

        Returns:
            List[dict]: One entry per stage, in file order.
        """
        with traced("extract_pipeline_stages"):
            return [s.model_dump(exclude_none=True) for s in extract_stages(yaml_text)]

    @mcp_instance.tool
    def extract_pipeline_tasks(yaml_text: str) -> list[dict[str, Any]]:
        """
        Extracts `- task: Name@version` steps with their display names and inputs.

        Args:
            yaml_text (str): The full text of the pipeline YAML file.

        Returns:
            List[dict]: One entry per task with zero-based startLine/endLine.
        """
        with traced("extract_pipeline_tasks"):
            return [t.model_dump(exclude_none=True) for t in extract_tasks(yaml_text)]

    @mcp_instance.tool
    def analyze_pipeline_yaml(yaml_text: str) -> dict[str, Any]:
        """
        Extracts parameters, stages and tasks from pipeline YAML in one call.

        Args:
            yaml_text (str): The full text of the pipeline YAML file.

        Returns:
            dict: Keys `parameters`, `stages` and `tasks`.
        """
        with traced("analyze_pipeline_yaml"):
            return analyze_pipeline(yaml_text).model_dump(exclude_none=True)

    @mcp_instance.tool
    def analyze_pipeline_file(path: str) -> dict[str, Any]:
        """
        Reads a pipeline YAML file from disk and extracts parameters, stages and tasks.

        Args:
            path (str): Path to the pipeline file, e.g. "azure-pipelines.yml".

        Returns:
            dict: Keys `path`, `parameters`, `stages` and `tasks`.
        """
        with traced("analyze_pipeline_file", **{"ado_yaml.path": path}):
            logger.info(f"Analyzing pipeline file: {path}")
            yaml_text = load_pipeline_text(path, config.source)
            result = analyze_pipeline(yaml_text).model_dump(exclude_none=True)
            result["path"] = path
            return result

    @mcp_instance.tool
    def compute_run_options(
        yaml_text: str,
        branch: str | None = None,
        parameter_values: dict[str, Any] | None = None,
        stages_to_run: list[str] | None = None,
    ) -> dict[str, Any]:
        """
        Builds run options for queuing a pipeline from its YAML and the user's choices.

        Runtime parameters are converted to strings and defaults are filled in for
        parameters the user left alone. Selected stages become a stagesToSkip list.

        Args:
            yaml_text (str): The full text of the pipeline YAML file.
            branch (str, optional): Branch to run, e.g. "refs/heads/main".
            parameter_values (dict, optional): Chosen runtime parameter values by name.
            stages_to_run (List[str], optional): Stages to run. Omit to run all stages.

        Returns:
            dict: `branch`, `templateParameters` and `stagesToSkip`, each only when set.
        """
        with traced("compute_run_options"):
            options = build_run_options(
                branch=branch,
                declarations=extract_parameters(yaml_text),
                submitted=parameter_values,
                all_stages=[stage.name for stage in extract_stages(yaml_text)],
                stages_to_run=stages_to_run,
            )
            return options.model_dump(exclude_none=True)
