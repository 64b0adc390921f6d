"""Stage topology extraction from pipeline YAML."""

import logging
import re
import time

from opentelemetry import trace

from ..models import StageNode
from ..scanning import (
    clean_scalar,
    indent_of,
    parse_inline_list,
    split_lines,
    strip_trailing_comment,
)
from ..telemetry import record_extraction

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

_STAGES_HEADER = re.compile(r"^stages:\s*$")
_STAGE_LINE = re.compile(r"^(\s*-\s*)(stage):\s*(.+)$", re.IGNORECASE)
_DEPENDS_ON_LINE = re.compile(r"^\s*dependsOn:(.*)$")
_LIST_ITEM_LINE = re.compile(r"^\s*-\s*(.+)$")
_KEY_LINE = re.compile(r"^\s*\w+:")


def parse_depends_on(value: str) -> list[str] | None:
    """
    Parse the scalar form of a `dependsOn:` value.

    `[A, B]` yields both names, `null` and `[]` yield None (nothing declared),
    and any other value is a single stage name.
    """
    value = value.strip()
    if value.startswith("["):
        return parse_inline_list(strip_trailing_comment(value)) or None
    if strip_trailing_comment(value).lower() == "null":
        return None
    return [clean_scalar(value)]


class _Stage:
    """Mutable accumulator for the stage currently being read."""

    def __init__(self, name: str, key_column: int):
        self.name = name
        # Stage properties sit at or left of the `stage:` key; deeper lines belong to jobs
        self.key_column = key_column
        self.depends_on: list[str] | None = None

    def build(self) -> StageNode:
        return StageNode(name=self.name, dependsOn=self.depends_on or None)


def extract_stages(yaml_text: str) -> list[StageNode]:
    """
    Extract stage names and their dependsOn edges from pipeline YAML text.

    Any `- stage:` bullet counts, whether or not it sits under a top-level
    `stages:` key, so stage lists inside templates are picked up as well.
    Dependencies are passed through as written; they are not checked against
    the stage names found.

    Args:
        yaml_text (str): The full text of a pipeline definition.

    Returns:
        List[StageNode]: Stages in source order.
    """
    with tracer.start_as_current_span("ado_yaml_extract_stages") as span:
        started_at = time.time()
        lines = split_lines(yaml_text or "")
        span.set_attribute("ado_yaml.operation", "extract_stages")
        span.set_attribute("ado_yaml.input_lines", len(lines))

        stages: list[StageNode] = []
        current: _Stage | None = None
        in_depends_on = False
        in_stages_section = False

        for line in lines:
            if _STAGES_HEADER.match(line):
                in_stages_section = True
                continue

            stage_match = _STAGE_LINE.match(line)
            if stage_match:
                if current is not None:
                    stages.append(current.build())
                in_depends_on = False
                name = clean_scalar(stage_match.group(3))
                if not name:
                    logger.debug(f"Skipping stage without a name: {line.strip()[:60]}")
                    current = None
                    continue
                current = _Stage(name, len(stage_match.group(1)))
                continue

            if current is None:
                continue

            depends_match = _DEPENDS_ON_LINE.match(line)
            if depends_match and indent_of(line) <= current.key_column:
                value = depends_match.group(1).strip()
                if strip_trailing_comment(value):
                    current.depends_on = parse_depends_on(value)
                    in_depends_on = False
                else:
                    current.depends_on = []
                    in_depends_on = True
                continue

            if in_depends_on:
                item_match = _LIST_ITEM_LINE.match(line)
                if item_match:
                    dependency = clean_scalar(item_match.group(1))
                    if dependency:
                        current.depends_on.append(dependency)
                    continue
                if _KEY_LINE.match(line):
                    in_depends_on = False

        if current is not None:
            stages.append(current.build())

        span.set_attribute("ado_yaml.result_count", len(stages))
        span.set_attribute("ado_yaml.stages_section", in_stages_section)
        record_extraction("stages", len(stages), started_at)
        logger.info(f"Extracted {len(stages)} stages")
        return stages


def extract_stage_names(yaml_text: str) -> list[str]:
    """Return only the stage names, in source order."""
    return [stage.name for stage in extract_stages(yaml_text)]
