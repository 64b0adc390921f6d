"""
Helpers for shaping a pipeline run request from extracted pipeline structure.

The Runs API takes runtime parameters as strings and expects the stages to
skip rather than the stages to run, so selections made against the extracted
parameters and stages are converted here.
"""

import logging
from typing import Any

from .models import ParameterDeclaration, RunOptions

logger = logging.getLogger(__name__)


def stages_to_skip(all_stages: list[str], stages_to_run: list[str] | None) -> list[str]:
    """
    Compute which stages to skip for a selection of stages to run.

    Args:
        all_stages (List[str]): Every stage name, in pipeline order.
        stages_to_run (List[str]): The selected stages. Empty or None means run everything.

    Returns:
        List[str]: Stages not selected, in pipeline order.
    """
    if not stages_to_run:
        return []
    selected = set(stages_to_run)
    return [stage for stage in all_stages if stage not in selected]


def format_parameter_value(value: Any) -> str | None:
    """
    Convert a submitted runtime parameter value to the string the API expects.

    Returns None for values that should not be sent (None or empty string).
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value)
    return text if text != "" else None


def build_template_parameters(
    declarations: list[ParameterDeclaration], submitted: dict[str, Any] | None
) -> dict[str, str]:
    """
    Merge submitted values with declared defaults into API template parameters.

    Submitted names that were not declared are passed through unchanged.
    """
    submitted = submitted or {}
    template_parameters: dict[str, str] = {}

    for declaration in declarations:
        if declaration.name in submitted:
            continue
        formatted = format_parameter_value(declaration.default)
        if formatted is not None:
            template_parameters[declaration.name] = formatted

    declared_names = {declaration.name for declaration in declarations}
    for name, value in submitted.items():
        formatted = format_parameter_value(value)
        if formatted is None:
            continue
        if name not in declared_names:
            logger.debug(f"Passing through undeclared runtime parameter '{name}'")
        template_parameters[name] = formatted

    return template_parameters


def build_run_options(
    branch: str | None = None,
    declarations: list[ParameterDeclaration] | None = None,
    submitted: dict[str, Any] | None = None,
    all_stages: list[str] | None = None,
    stages_to_run: list[str] | None = None,
) -> RunOptions:
    """
    Build the options for queuing a run.

    Args:
        branch (str, optional): Branch to run, e.g. "refs/heads/main".
        declarations (List[ParameterDeclaration], optional): Extracted runtime parameters.
        submitted (dict, optional): Values chosen by the user, keyed by parameter name.
        all_stages (List[str], optional): Every stage name in pipeline order.
        stages_to_run (List[str], optional): Stages the user selected.

    Returns:
        RunOptions: Options with empty collections left unset.
    """
    template_parameters = build_template_parameters(declarations or [], submitted)
    skipped = stages_to_skip(all_stages or [], stages_to_run)

    logger.info(
        f"Built run options: branch={branch}, parameters={len(template_parameters)}, "
        f"stages_to_skip={len(skipped)}"
    )

    return RunOptions(
        branch=branch,
        templateParameters=template_parameters or None,
        stagesToSkip=skipped or None,
    )
