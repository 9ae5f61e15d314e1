"""Load and validate the `stylerun.yaml` workspace declaration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Literal

import yaml  # type: ignore[import-untyped]

from stylerun.host.base import ActionHost, RecordingHost
from stylerun.rules.batch import postcss_multi_run
from stylerun.rules.run import postcss_run
from stylerun.rules.types import DEFAULT_OUTPUT_PATTERN, ActionSpec, DataResource, Plugin, RuleContext

TargetKind = Literal["postcss_run", "postcss_multi_run"]
TARGET_KINDS: tuple[str, ...] = ("postcss_run", "postcss_multi_run")

CONFIG_FILENAME = "stylerun.yaml"

CONFIG_REASON_MISSING = "CONFIG_MISSING"
CONFIG_REASON_PARSE_ERROR = "CONFIG_PARSE_ERROR"
CONFIG_REASON_SCHEMA_INVALID = "CONFIG_SCHEMA_INVALID"

# Keep this literal deterministic and sorted in write path.
WORKSPACE_CONFIG_TEMPLATE: dict[str, Any] = {
    "bin_dir": "out/bin",
    "runner": "node_modules/.bin/postcss-runner",
    "wrapper": None,
    "plugins": {
        "autoprefixer": {"require": "autoprefixer"},
    },
    "resources": {},
    "targets": {
        "styles": {
            "kind": "postcss_run",
            "src": ["styles/main.css"],
            "sourcemap": False,
            "plugins": {"autoprefixer": "[]"},
        },
    },
}


class ConfigError(ValueError):
    """Workspace configuration validation error."""

    reason_code: str

    def __init__(self, message: str, reason_code: str = CONFIG_REASON_SCHEMA_INVALID) -> None:
        super().__init__(message)
        self.reason_code = reason_code


@dataclass(frozen=True)
class TargetSpec:
    """One declared rule invocation."""

    name: str
    kind: TargetKind
    srcs: tuple[str, ...]
    plugins: dict[str, str]
    output_name: str = ""
    additional_outputs: tuple[str, ...] = ()
    output_pattern: str = DEFAULT_OUTPUT_PATTERN
    sourcemap: bool = False
    data: tuple[str, ...] = ()
    named_data: dict[str, str] = field(default_factory=dict)
    runner: str | None = None
    wrapper: str | None = None


@dataclass(frozen=True)
class WorkspaceConfig:
    """Normalized workspace declaration."""

    root: Path
    path: Path
    bin_dir: PurePosixPath
    runner: str
    wrapper: str | None
    plugins: dict[str, Plugin]
    resources: dict[str, DataResource]
    targets: dict[str, TargetSpec]


def config_path_for_workspace(root: Path) -> Path:
    """Return the canonical configuration path for a workspace."""
    return root.resolve() / CONFIG_FILENAME


def init_workspace(root: Path, *, force: bool = False) -> Path:
    """Write the default workspace declaration deterministically."""
    output_path = config_path_for_workspace(root)
    if output_path.exists() and not force:
        raise FileExistsError(f"Workspace config already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    rendered = yaml.safe_dump(WORKSPACE_CONFIG_TEMPLATE, sort_keys=True)
    output_path.write_text(rendered, encoding="utf-8")
    return output_path


def load_workspace(root: Path) -> WorkspaceConfig:
    """Load, normalize, and validate the workspace declaration."""
    path = config_path_for_workspace(root)
    if not path.exists():
        raise ConfigError(
            f"Missing workspace config at {path}. Run `stylerun init --repo-root {root}` first.",
            CONFIG_REASON_MISSING,
        )

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{CONFIG_FILENAME} parse error: {exc}", CONFIG_REASON_PARSE_ERROR) from exc
    if not isinstance(raw, dict):
        raise ConfigError(
            f"{CONFIG_FILENAME} parse error: expected mapping at top level",
            CONFIG_REASON_PARSE_ERROR,
        )

    runner = raw.get("runner")
    if not isinstance(runner, str) or not runner.strip():
        raise ConfigError(f"{CONFIG_FILENAME} missing required `runner` path")
    wrapper = _optional_string(raw.get("wrapper"), "wrapper")
    bin_dir = PurePosixPath(_optional_string(raw.get("bin_dir"), "bin_dir") or "out/bin")

    plugins_raw = _mapping(raw.get("plugins"), "plugins")
    plugins: dict[str, Plugin] = {}
    for label, entry in plugins_raw.items():
        if isinstance(entry, str):
            require = entry
        elif isinstance(entry, dict) and isinstance(entry.get("require"), str):
            require = entry["require"]
        else:
            raise ConfigError(f"plugins.{label} must be a module string or a mapping with `require`")
        plugins[str(label)] = Plugin(label=str(label), require=require)

    resources_raw = _mapping(raw.get("resources"), "resources")
    resources: dict[str, DataResource] = {}
    for label, files in resources_raw.items():
        file_list = _normalize_string_list(files, f"resources.{label}")
        resources[str(label)] = DataResource(
            label=str(label),
            files=tuple(PurePosixPath(item) for item in file_list),
        )

    targets_raw = _mapping(raw.get("targets"), "targets")
    if not targets_raw:
        raise ConfigError(f"{CONFIG_FILENAME} missing required non-empty `targets` mapping")
    targets = {str(name): _parse_target(str(name), entry) for name, entry in targets_raw.items()}

    for target in targets.values():
        for label in target.plugins:
            if label not in plugins:
                raise ConfigError(f"targets.{target.name}.plugins references unknown plugin `{label}`")

    return WorkspaceConfig(
        root=root.resolve(),
        path=path,
        bin_dir=bin_dir,
        runner=runner,
        wrapper=wrapper,
        plugins=plugins,
        resources=resources,
        targets=targets,
    )


def _parse_target(name: str, entry: Any) -> TargetSpec:
    if not isinstance(entry, dict):
        raise ConfigError(f"target `{name}` must be a mapping")
    kind = str(entry.get("kind", "postcss_run"))
    if kind not in TARGET_KINDS:
        raise ConfigError(f"targets.{name}.kind must be one of {TARGET_KINDS}, got `{kind}`")

    src_key = "srcs" if kind == "postcss_multi_run" else "src"
    srcs = _normalize_string_list(entry.get(src_key), f"targets.{name}.{src_key}")
    if not srcs:
        raise ConfigError(f"targets.{name}.{src_key} must list at least one file")

    plugins_raw = _mapping(entry.get("plugins"), f"targets.{name}.plugins")
    plugins = {
        str(label): _plugin_options(options, f"targets.{name}.plugins.{label}") for label, options in plugins_raw.items()
    }

    named_raw = _mapping(entry.get("named_data"), f"targets.{name}.named_data")
    named_data: dict[str, str] = {}
    for key, value in named_raw.items():
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"targets.{name}.named_data.{key} must be a resource label string")
        named_data[str(key)] = value

    return TargetSpec(
        name=name,
        kind=kind,  # type: ignore[arg-type]
        srcs=tuple(srcs),
        plugins=plugins,
        output_name=_optional_string(entry.get("output_name"), f"targets.{name}.output_name") or "",
        additional_outputs=tuple(
            _normalize_string_list(entry.get("additional_outputs"), f"targets.{name}.additional_outputs")
        ),
        output_pattern=_optional_string(entry.get("output_pattern"), f"targets.{name}.output_pattern")
        or DEFAULT_OUTPUT_PATTERN,
        sourcemap=_optional_bool(entry.get("sourcemap"), f"targets.{name}.sourcemap"),
        data=tuple(_normalize_string_list(entry.get("data"), f"targets.{name}.data")),
        named_data=named_data,
        runner=_optional_string(entry.get("runner"), f"targets.{name}.runner"),
        wrapper=_optional_string(entry.get("wrapper"), f"targets.{name}.wrapper"),
    )


def _mapping(value: Any, field_name: str) -> dict[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"`{field_name}` must be a mapping")
    return value


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"`{field_name}` must be true or false, got `{value!r}`")
    return value


def _plugin_options(value: Any, field_name: str) -> str:
    """Options reach the runner as a JSON payload; strings are passed verbatim."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"`{field_name}` cannot be encoded as JSON: {exc}") from exc


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"`{field_name}` must be a string")
    return value.strip() or None


def _normalize_string_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"`{field_name}` must be a string or a list of strings")
    return list(value)


def resolve_resource(workspace: WorkspaceConfig, label: str) -> DataResource:
    """Look up a declared resource; an undeclared label names a single file."""
    resource = workspace.resources.get(label)
    if resource is not None:
        return resource
    return DataResource(label=label, files=(PurePosixPath(label),))


def evaluate_target(workspace: WorkspaceConfig, target: TargetSpec, host: ActionHost) -> list[PurePosixPath]:
    """Evaluate one target, declaring its actions on `host`."""
    ctx = RuleContext(name=target.name, host=host, bin_dir=workspace.bin_dir)
    plugins = {workspace.plugins[label]: options for label, options in target.plugins.items()}
    data = [resolve_resource(workspace, label) for label in target.data]
    named_data = {name: resolve_resource(workspace, label) for name, label in target.named_data.items()}
    runner = target.runner or workspace.runner
    wrapper = target.wrapper or workspace.wrapper

    if target.kind == "postcss_multi_run":
        return postcss_multi_run(
            ctx,
            srcs=target.srcs,
            plugins=plugins,
            runner=runner,
            output_pattern=target.output_pattern,
            sourcemap=target.sourcemap,
            data=data,
            named_data=named_data,
            wrapper=wrapper,
        )
    return postcss_run(
        ctx,
        src=target.srcs,
        plugins=plugins,
        runner=runner,
        output_name=target.output_name,
        additional_outputs=target.additional_outputs,
        sourcemap=target.sourcemap,
        data=data,
        named_data=named_data,
        wrapper=wrapper,
    )


def analyze(workspace: WorkspaceConfig, names: list[str] | None = None) -> list[tuple[str, ActionSpec]]:
    """Evaluate targets (all of them, sorted, by default) into a list of actions."""
    selected = sorted(workspace.targets) if not names else list(names)
    planned: list[tuple[str, ActionSpec]] = []
    for name in selected:
        target = workspace.targets.get(name)
        if target is None:
            raise ConfigError(f"Unknown target `{name}` in {workspace.path}")
        host = RecordingHost()
        evaluate_target(workspace, target, host)
        planned.extend((name, action) for action in host.actions)
    return planned
