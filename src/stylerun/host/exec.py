"""Process execution for locally run actions."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Captured outcome of one runner process."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ExecError(RuntimeError):
    """Raised when a runner exits non-zero in check mode."""

    def __init__(self, result: ExecResult, *, label: str | None = None):
        rendered = " ".join(result.argv)
        detail = (result.stderr or result.stdout).strip()
        prefix = f"{label}: " if label else ""
        super().__init__(f"{prefix}command failed ({result.returncode}): {rendered}\n{detail}".rstrip())
        self.result = result


def run_command(
    argv: list[str],
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    label: str | None = None,
) -> ExecResult:
    """Run `argv` from `cwd`, capturing output as text."""
    logger.debug("exec (cwd=%s): %s", cwd, " ".join(argv))
    try:
        completed = subprocess.run(
            argv,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError(f"unable to start {argv[0]}: {exc}") from exc

    result = ExecResult(
        argv=tuple(argv),
        cwd=cwd.resolve(),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    if result.stderr.strip():
        logger.debug("stderr: %s", result.stderr.strip())
    if check and not result.ok:
        raise ExecError(result, label=label)
    return result
