"""Run declared actions one after another in a local workspace.

Not a scheduler: there is no caching, sandboxing or parallelism. Actions run
in the order they were declared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from stylerun.host.exec import ExecResult, run_command

if TYPE_CHECKING:
    from stylerun.rules.types import ActionSpec

logger = logging.getLogger(__name__)


def render_param_file(arguments: Iterable[str]) -> str:
    """Render arguments in the multiline parameter file format."""
    return "".join(f"{arg}\n" for arg in arguments)


def param_file_path(action: ActionSpec, *, root: Path) -> Path:
    """Location of the parameter file for `action`, next to its first output."""
    return root / f"{action.outputs[0]}-0.params"


def build_argv(action: ActionSpec, *, root: Path) -> list[str]:
    """Build the process argv for `action`, writing its parameter file if any."""
    argv = [str(root / action.executable)]
    if action.param_file is None:
        return argv + list(action.arguments)

    params = param_file_path(action, root=root)
    params.parent.mkdir(parents=True, exist_ok=True)
    params.write_text(render_param_file(action.arguments), encoding="utf-8")
    return argv + [action.param_file.flag_format % params.relative_to(root)]


def execute_action(action: ActionSpec, *, root: Path) -> ExecResult:
    """Run one action from `root` and check that it produced its outputs."""
    for output in action.outputs:
        (root / output).parent.mkdir(parents=True, exist_ok=True)

    missing_inputs = [str(path) for path in action.inputs if not (root / path).exists()]
    if missing_inputs:
        raise RuntimeError(f"{action.mnemonic}: missing inputs: {', '.join(missing_inputs)}")

    logger.info(action.progress_message)
    argv = build_argv(action, root=root)
    result = run_command(argv, cwd=root, label=action.mnemonic)

    missing_outputs = [str(path) for path in action.outputs if not (root / path).exists()]
    if missing_outputs:
        raise RuntimeError(f"{action.mnemonic}: declared outputs were not created: {', '.join(missing_outputs)}")
    return result


def execute_actions(actions: Iterable[ActionSpec], *, root: Path) -> list[ExecResult]:
    """Run `actions` in order, stopping at the first failure."""
    resolved = root.resolve()
    return [execute_action(action, root=resolved) for action in actions]
