"""
Line classification helpers shared by the pipeline YAML extractors.

The extractors never build a YAML tree. They walk the text line by line and
only need to know how deep a line is indented, whether it carries content, and
how to clean up a scalar value.
"""

import re

_LEADING_WHITESPACE = re.compile(r"\S")


def split_lines(text: str) -> list[str]:
    """
    Split pipeline text into lines on `\\n` only.

    A carriage return stays part of the line; trimming removes it later.
    """
    return text.split("\n")


def indent_of(line: str) -> int:
    """
    Return the column of the first non-whitespace character, or -1 for a blank line.

    Tabs and spaces both count as one column.
    """
    match = _LEADING_WHITESPACE.search(line)
    return match.start() if match else -1


def is_skippable(line: str) -> bool:
    """Check if a line is blank or a full-line comment."""
    trimmed = line.strip()
    return not trimmed or trimmed.startswith("#")


def strip_quotes(value: str) -> str:
    """
    Remove a single matching pair of surrounding quotes.

    Only `'...'` and `"..."` pairs are removed; unbalanced quotes are left as-is.
    """
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def strip_trailing_comment(value: str) -> str:
    """Drop everything from the first `#` onwards and trim the rest."""
    return value.split("#", 1)[0].strip()


def clean_scalar(value: str) -> str:
    """
    Trim a scalar and remove its trailing comment and surrounding quotes.

    A quoted scalar ends at its closing quote, so `#` inside the quotes is kept.
    """
    value = value.strip()
    if value[:1] in ("'", '"'):
        closing = value.find(value[0], 1)
        if closing > 0:
            return value[1:closing]
    return strip_quotes(strip_trailing_comment(value))


def parse_inline_list(value: str) -> list[str]:
    """
    Parse a flow sequence such as `[Build, 'Test']` into its items.

    Brackets are dropped, items are split on commas, trimmed and quote-stripped,
    and empty items are discarded.
    """
    inner = value.replace("[", "").replace("]", "")
    items = (strip_quotes(item.strip()) for item in inner.split(","))
    return [item for item in items if item]
