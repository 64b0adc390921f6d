"""Task step extraction from pipeline YAML."""

import logging
import re
import time

from opentelemetry import trace

from ..models import TaskReference
from ..scanning import indent_of, is_skippable, split_lines, strip_quotes
from ..telemetry import record_extraction

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

_TASK_LINE = re.compile(r"^-\s*task:\s*([^@\s]+)@(\d+)")
_KEY_VALUE_LINE = re.compile(r"^([^:]+):\s*(.*)$")


def _input_value(raw: str) -> bool | str:
    value = strip_quotes(raw.strip())
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _read_task(lines: list[str], start: int, name: str, version: str) -> tuple[TaskReference, int]:
    """
    Read the body of a task step starting at `start`.

    Returns the task and the index of the first line after its block.
    """
    base_indent = indent_of(lines[start])
    display_name = None
    inputs: dict[str, bool | str] = {}
    inputs_indent = None
    input_key_indent = None
    end = start

    i = start + 1
    while i < len(lines):
        line = lines[i]
        if is_skippable(line):
            i += 1
            continue

        indent = indent_of(line)
        if indent <= base_indent:
            break

        end = i
        trimmed = line.strip()

        if inputs_indent is not None and indent <= inputs_indent:
            inputs_indent = None

        if inputs_indent is None:
            if trimmed == "inputs:":
                inputs_indent = indent
                input_key_indent = None
            elif trimmed.startswith("displayName:"):
                display_name = strip_quotes(trimmed[len("displayName:") :].strip()) or None
        else:
            if input_key_indent is None:
                input_key_indent = indent
            if indent == input_key_indent:
                match = _KEY_VALUE_LINE.match(trimmed)
                if match:
                    inputs[match.group(1).strip()] = _input_value(match.group(2))

        i += 1

    task = TaskReference(
        name=name,
        version=version,
        displayName=display_name,
        inputs=inputs,
        startLine=start,
        endLine=end,
    )
    return task, i


def extract_tasks(yaml_text: str) -> list[TaskReference]:
    """
    Extract `- task: Name@version` steps with their display name and inputs.

    A task's block runs until the next non-blank line indented at or left of
    the task bullet. Only the direct keys of `inputs:` are captured; multi-line
    values keep their block indicator (e.g. `|`) as the value.

    Args:
        yaml_text (str): The full text of a pipeline definition.

    Returns:
        List[TaskReference]: Tasks in source order with zero-based line ranges.
    """
    with tracer.start_as_current_span("ado_yaml_extract_tasks") as span:
        started_at = time.time()
        lines = split_lines(yaml_text or "")
        span.set_attribute("ado_yaml.operation", "extract_tasks")
        span.set_attribute("ado_yaml.input_lines", len(lines))

        tasks: list[TaskReference] = []
        i = 0
        while i < len(lines):
            match = _TASK_LINE.match(lines[i].strip())
            if not match:
                i += 1
                continue

            task, i = _read_task(lines, i, match.group(1), match.group(2))
            logger.debug(
                f"Found task {task.reference} on lines {task.startLine}-{task.endLine}"
            )
            tasks.append(task)

        span.set_attribute("ado_yaml.result_count", len(tasks))
        record_extraction("tasks", len(tasks), started_at)
        logger.info(f"Extracted {len(tasks)} tasks")
        return tasks
