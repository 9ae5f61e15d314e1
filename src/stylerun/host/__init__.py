"""Build hosts: where declared runner actions end up."""

from stylerun.host.base import ActionHost, RecordingHost
from stylerun.host.exec import ExecError, ExecResult, run_command
from stylerun.host.local import build_argv, execute_action, execute_actions, render_param_file

__all__ = [
    "ActionHost",
    "ExecError",
    "ExecResult",
    "RecordingHost",
    "build_argv",
    "execute_action",
    "execute_actions",
    "render_param_file",
    "run_command",
]
