"""Deterministic output naming helpers."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

_PLACEHOLDER = re.compile(r"\{(name|dir|rule)\}")


def default_output_name(rule: str, output_name: str = "") -> str:
    """Return `output_name`, falling back to `<rule>.css`."""
    return output_name or f"{rule}.css"


def sourcemap_name(output_name: str) -> str:
    """Name of the source map written next to `output_name`."""
    return output_name + ".map"


def strip_extension(path: PurePosixPath | str) -> str:
    """Remove the final `.`-separated segment from a path."""
    components = str(path).split(".")
    components.pop()
    return ".".join(components)


def expand_output_pattern(pattern: str, path: PurePosixPath | str, rule: str) -> str:
    """Expand `{name}`, `{dir}` and `{rule}` in `pattern` for one input file.

    Any other text, unknown placeholders included, is kept verbatim.
    """
    source = PurePosixPath(path)
    parent = str(source.parent)
    values = {
        "name": source.name,
        "dir": "" if parent == "." else parent,
        "rule": rule,
    }
    return _PLACEHOLDER.sub(lambda match: values[match.group(1)], pattern)
