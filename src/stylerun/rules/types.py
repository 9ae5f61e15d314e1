"""Domain types for PostCSS rule evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stylerun.host.base import ActionHost

CONTENT_EXTENSION = ".css"
SIDECAR_EXTENSION = ".map"

DEFAULT_OUTPUT_PATTERN = "{rule}/{name}"
EMPTY_PLUGIN_OPTIONS = "[]"

RUNNER_MNEMONIC = "PostCSSRunner"
WRAPPER_MNEMONIC = "PostCSSWrapper"


@dataclass(frozen=True)
class Plugin:
    """A PostCSS plugin and the module identifier the runner requires."""

    label: str
    require: str


@dataclass(frozen=True)
class DataResource:
    """A labelled group of files made visible to the runner."""

    label: str
    files: tuple[PurePosixPath, ...] = ()


PluginSpec = dict[Plugin, str]


@dataclass(frozen=True)
class SourcePair:
    """A content file and its optional source map sidecar."""

    content: PurePosixPath
    sidecar: PurePosixPath | None = None


@dataclass(frozen=True)
class InvocationRequest:
    """Fully resolved description of one runner invocation."""

    content: PurePosixPath
    output: PurePosixPath
    plugins: PluginSpec
    runner: PurePosixPath
    bin_dir: PurePosixPath
    sidecar: PurePosixPath | None = None
    sidecar_output: PurePosixPath | None = None
    additional_outputs: tuple[PurePosixPath, ...] = ()
    data: tuple[DataResource, ...] = ()
    named_data: dict[DataResource, str] = field(default_factory=dict)
    wrapper: PurePosixPath | None = None

    @property
    def sourcemap(self) -> bool:
        return self.sidecar_output is not None


@dataclass(frozen=True)
class ParamFile:
    """How arguments are spilled into a parameter file."""

    flag_format: str = "@%s"
    file_format: str = "multiline"
    use_always: bool = True


@dataclass(frozen=True)
class ActionSpec:
    """Declarative external-process action handed to the host."""

    inputs: tuple[PurePosixPath, ...]
    outputs: tuple[PurePosixPath, ...]
    executable: PurePosixPath
    arguments: tuple[str, ...]
    mnemonic: str
    progress_message: str
    tools: tuple[PurePosixPath, ...] = ()
    param_file: ParamFile | None = None
    execution_requirements: dict[str, str] = field(default_factory=dict)

    @property
    def supports_workers(self) -> bool:
        return self.execution_requirements.get("supports-workers") == "1"


@dataclass(frozen=True)
class RuleContext:
    """Per-target evaluation environment."""

    name: str
    host: ActionHost
    bin_dir: PurePosixPath = PurePosixPath(".")
    package: PurePosixPath = PurePosixPath("")

    def declare_file(self, name: str) -> PurePosixPath:
        """Return the output path of a file declared by this target."""
        return self.bin_dir / self.package / name.lstrip("/")
