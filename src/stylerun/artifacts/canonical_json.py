"""Canonical JSON helpers for deterministic stylerun artifacts."""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

    from stylerun.rules.types import ActionSpec

ACTIONS_SCHEMA_VERSION = "stylerun.actions.v1"


def canonical_dumps(obj: Any) -> str:
    """Serialize a JSON-compatible object with stable canonical formatting."""
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def write_json(path: Path, obj: Any) -> None:
    """Write canonical JSON as UTF-8."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(canonical_dumps(obj), encoding="utf-8")


def sha256_text(text: str) -> str:
    """Compute SHA-256 for UTF-8 text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def action_to_dict(target: str, action: ActionSpec) -> dict[str, Any]:
    return {
        "target": target,
        "mnemonic": action.mnemonic,
        "executable": str(action.executable),
        "tools": [str(path) for path in action.tools],
        "arguments": list(action.arguments),
        "inputs": [str(path) for path in action.inputs],
        "outputs": [str(path) for path in action.outputs],
        "param_file": action.param_file.flag_format if action.param_file else None,
        "supports_workers": action.supports_workers,
        "progress_message": action.progress_message,
    }


def actions_document(actions: list[tuple[str, ActionSpec]]) -> dict[str, Any]:
    """Build the action plan payload with a digest over its action list."""
    entries = [action_to_dict(target, action) for target, action in actions]
    return {
        "schema_version": ACTIONS_SCHEMA_VERSION,
        "actions": entries,
        "sha256": sha256_text(canonical_dumps(entries)),
    }
