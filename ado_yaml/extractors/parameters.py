"""Runtime parameter extraction from pipeline YAML."""

import logging
import re
import time
from enum import Enum

from opentelemetry import trace

from ..models import ParameterDeclaration, ParameterType
from ..scanning import (
    clean_scalar,
    indent_of,
    is_skippable,
    parse_inline_list,
    split_lines,
    strip_quotes,
    strip_trailing_comment,
)
from ..telemetry import record_extraction

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

_NAME_LINE = re.compile(r"^-\s*name:\s*(.+)$")
_PROPERTY_LINE = re.compile(r"^(\w+):\s*(.*)$")
# Same prefix rule as JavaScript's parseFloat
_NUMBER_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class _State(Enum):
    SEEKING = "seeking"
    IN_BLOCK = "in_block"
    IN_ENTRY = "in_entry"
    IN_VALUES = "in_values"


def coerce_default(raw: str, param_type: str) -> bool | float | str:
    """
    Convert a quote-stripped `default:` scalar according to the parameter type.

    Booleans compare the lowercase text with "true"; numbers take the leading
    numeric prefix and fall back to 0.0; everything else stays a string.
    """
    if param_type == ParameterType.BOOLEAN:
        return raw.lower() == "true"
    if param_type == ParameterType.NUMBER:
        match = _NUMBER_PREFIX.match(raw.strip())
        return float(match.group(0)) if match else 0.0
    return raw


class _Entry:
    """Mutable accumulator for the parameter currently being read."""

    def __init__(self, name: str, indent: int):
        self.name = name
        self.indent = indent
        # Column of the first property line; deeper key lines belong to a nested default
        self.property_column: int | None = None
        self.type = ParameterType.STRING.value
        self.display_name: str | None = None
        self.default: bool | float | str | None = None
        self.values: list[str] = []

    def apply(self, key: str, value: str) -> bool:
        """Apply a `key: value` property line; returns True if it opened a values list."""
        if key == "type":
            self.type = ParameterType.parse(strip_trailing_comment(value)).value
        elif key == "displayName":
            self.display_name = strip_quotes(value)
        elif key == "default":
            if value:
                self.default = coerce_default(strip_quotes(value), self.type)
        elif key == "values":
            if not strip_trailing_comment(value):
                return True
            if value.startswith("["):
                self.values.extend(parse_inline_list(value))
        return False

    def build(self) -> ParameterDeclaration | None:
        if not self.name:
            return None
        return ParameterDeclaration(
            name=self.name,
            type=self.type,
            displayName=self.display_name,
            default=self.default,
            values=list(self.values) if self.values else None,
        )


def extract_parameters(yaml_text: str) -> list[ParameterDeclaration]:
    """
    Extract runtime parameter declarations from pipeline YAML text.

    Only the first `parameters:` block is read. Constructs the scanner does
    not understand are skipped, so the result is always a list, possibly empty.

    Args:
        yaml_text (str): The full text of a pipeline definition.

    Returns:
        List[ParameterDeclaration]: Declarations in source order.
    """
    with tracer.start_as_current_span("ado_yaml_extract_parameters") as span:
        started_at = time.time()
        lines = split_lines(yaml_text or "")
        span.set_attribute("ado_yaml.operation", "extract_parameters")
        span.set_attribute("ado_yaml.input_lines", len(lines))

        parameters: list[ParameterDeclaration] = []
        state = _State.SEEKING
        base_indent = -1
        current: _Entry | None = None

        def flush():
            if current is None:
                return
            declaration = current.build()
            if declaration is not None:
                parameters.append(declaration)

        for line in lines:
            if is_skippable(line):
                continue

            trimmed = line.strip()
            indent = indent_of(line)

            if state is _State.SEEKING:
                if trimmed.startswith("parameters:"):
                    state = _State.IN_BLOCK
                    base_indent = indent
                continue

            if indent <= base_indent and not trimmed.startswith("-"):
                logger.debug(f"Parameters block ended at: {trimmed[:60]}")
                break

            name_match = _NAME_LINE.match(trimmed)
            if name_match:
                flush()
                name = clean_scalar(name_match.group(1))
                current = _Entry(name, indent)
                state = _State.IN_ENTRY
                continue

            if current is None:
                continue

            if state is _State.IN_VALUES:
                if trimmed.startswith("-"):
                    current.values.append(strip_quotes(trimmed[1:].strip()))
                    continue
                if ":" not in trimmed:
                    continue
                state = _State.IN_ENTRY

            if trimmed.startswith("-"):
                if indent <= current.indent:
                    # A bullet without `name:` is a parameter we cannot identify
                    logger.debug(f"Skipping parameter entry without a name: {trimmed[:60]}")
                    flush()
                    current = None
                continue

            if current.property_column is None:
                current.property_column = indent
            elif indent > current.property_column:
                continue

            property_match = _PROPERTY_LINE.match(trimmed)
            if property_match and current.apply(
                property_match.group(1), property_match.group(2).strip()
            ):
                state = _State.IN_VALUES

        flush()

        span.set_attribute("ado_yaml.result_count", len(parameters))
        record_extraction("parameters", len(parameters), started_at)
        logger.info(f"Extracted {len(parameters)} runtime parameters")
        return parameters
