"""Tests for the local action executor."""

from __future__ import annotations

import os
import stat
from pathlib import Path, PurePosixPath

import pytest

from stylerun.host.exec import ExecError, ExecResult
from stylerun.host.local import build_argv, execute_action, execute_actions, render_param_file
from stylerun.rules.assemble import assemble_action
from stylerun.rules.types import InvocationRequest, Plugin

P = PurePosixPath
PLUGIN = Plugin(label="autoprefixer", require="autoprefixer")


def _action(wrapper: str | None = None):
    return assemble_action(
        InvocationRequest(
            content=P("style.css"),
            output=P("out/style.css"),
            plugins={PLUGIN: ""},
            runner=P("tools/runner"),
            bin_dir=P("out"),
            wrapper=P(wrapper) if wrapper else None,
        )
    )


class _RunStub:
    def __init__(self, *, create_outputs: bool = True):
        self.calls: list[list[str]] = []
        self.create_outputs = create_outputs

    def __call__(self, argv: list[str], *, cwd: Path, check: bool = True, label: str | None = None) -> ExecResult:
        self.calls.append(argv)
        if self.create_outputs:
            (cwd / "out" / "style.css").write_text("a{}", encoding="utf-8")
        return ExecResult(argv=tuple(argv), cwd=cwd, returncode=0, stdout="", stderr="")


def test_render_param_file_is_one_arg_per_line() -> None:
    assert render_param_file(["--cssFile", "a b.css"]) == "--cssFile\na b.css\n"


def test_build_argv_spills_arguments_into_param_file(tmp_path: Path) -> None:
    action = _action()
    argv = build_argv(action, root=tmp_path)

    assert argv == [str(tmp_path / "tools/runner"), "@out/style.css-0.params"]
    params = (tmp_path / "out" / "style.css-0.params").read_text(encoding="utf-8")
    assert params.splitlines() == list(action.arguments)


def test_build_argv_with_wrapper_passes_arguments_inline(tmp_path: Path) -> None:
    action = _action(wrapper="tools/wrapper")
    argv = build_argv(action, root=tmp_path)

    assert argv[0] == str(tmp_path / "tools/wrapper")
    assert argv[1:] == list(action.arguments)
    assert argv[1] == "tools/runner"
    assert not (tmp_path / "out" / "style.css-0.params").exists()


def test_execute_action_runs_and_checks_outputs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "style.css").write_text("a{}", encoding="utf-8")
    stub = _RunStub()
    monkeypatch.setattr("stylerun.host.local.run_command", stub)

    results = execute_actions([_action()], root=tmp_path)

    assert len(results) == 1
    assert stub.calls[0][1] == "@out/style.css-0.params"


def test_execute_action_refuses_missing_inputs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    stub = _RunStub()
    monkeypatch.setattr("stylerun.host.local.run_command", stub)

    with pytest.raises(RuntimeError, match="missing inputs: style.css"):
        execute_action(_action(), root=tmp_path)
    assert stub.calls == []


def test_execute_action_refuses_missing_outputs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "style.css").write_text("a{}", encoding="utf-8")
    monkeypatch.setattr("stylerun.host.local.run_command", _RunStub(create_outputs=False))

    with pytest.raises(RuntimeError, match="declared outputs were not created: out/style.css"):
        execute_action(_action(), root=tmp_path)


def _write_script(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)


@pytest.mark.skipif(os.name != "posix", reason="requires /bin/sh")
def test_execute_action_with_real_runner(tmp_path: Path) -> None:
    (tmp_path / "style.css").write_text("a{color:red}", encoding="utf-8")
    _write_script(
        tmp_path / "tools" / "runner",
        'params="${1#@}"\n'
        "out=$(sed -n '/^--outCssFile$/{n;p;}' \"$params\")\n"
        'cp style.css "$out"\n',
    )

    execute_action(_action(), root=tmp_path)

    assert (tmp_path / "out" / "style.css").read_text(encoding="utf-8") == "a{color:red}"


@pytest.mark.skipif(os.name != "posix", reason="requires /bin/sh")
def test_failing_runner_raises_exec_error(tmp_path: Path) -> None:
    (tmp_path / "style.css").write_text("a{}", encoding="utf-8")
    _write_script(tmp_path / "tools" / "runner", 'echo "CssSyntaxError" >&2\nexit 3\n')

    with pytest.raises(ExecError, match="CssSyntaxError") as excinfo:
        execute_action(_action(), root=tmp_path)
    assert excinfo.value.result.returncode == 3


def test_missing_runner_binary_is_reported(tmp_path: Path) -> None:
    (tmp_path / "style.css").write_text("a{}", encoding="utf-8")

    with pytest.raises(RuntimeError, match="unable to start"):
        execute_action(_action(), root=tmp_path)
