"""Pytest configuration and fixtures for stylerun tests."""
import logging
from pathlib import Path, PurePosixPath

import pytest

from stylerun.host.base import RecordingHost
from stylerun.rules.types import Plugin, RuleContext


def pytest_sessionfinish(session, exitstatus):
    """Check that coverage data was collected if --cov was requested.

    This prevents silent "no data collected" scenarios that produce 0% coverage
    without failing the test run.
    """
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)
    if not cov_enabled:
        return

    coverage_files = list(Path.cwd().glob(".coverage*"))
    if not coverage_files:
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "Check that tests import from 'stylerun' (the package) not 'src/stylerun' (filesystem path).",
            returncode=1
        )


@pytest.fixture(autouse=True)
def _reset_stylerun_logger():
    """Undo CLI logging setup so caplog keeps seeing stylerun records."""
    yield
    logger = logging.getLogger("stylerun")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def make_ctx(host):
    """Build a rule context writing straight into the workspace root."""

    def _make(name: str, bin_dir: str = ".") -> RuleContext:
        return RuleContext(name=name, host=host, bin_dir=PurePosixPath(bin_dir))

    return _make


@pytest.fixture
def autoprefixer() -> Plugin:
    return Plugin(label="autoprefixer", require="autoprefixer")
