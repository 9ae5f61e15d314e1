"""Translate an invocation request into a runner action."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from stylerun.rules.errors import NoPluginsProvided, OutputOverwritesInput
from stylerun.rules.types import (
    EMPTY_PLUGIN_OPTIONS,
    RUNNER_MNEMONIC,
    WRAPPER_MNEMONIC,
    ActionSpec,
    InvocationRequest,
    ParamFile,
)

if TYPE_CHECKING:
    from stylerun.rules.types import RuleContext

logger = logging.getLogger(__name__)


def _data_files(request: InvocationRequest) -> list[PurePosixPath]:
    files: list[PurePosixPath] = []
    for resource in (*request.data, *request.named_data):
        files.extend(resource.files)
    return files


def build_arguments(request: InvocationRequest) -> list[str]:
    """Build the runner command line for `request`.

    The token order is part of the runner contract and must not change.
    """
    if not request.plugins:
        raise NoPluginsProvided()

    args: list[str] = []
    if request.wrapper is not None:
        args.append(str(request.runner))
    args.extend(["--binDir", str(request.bin_dir)])
    args.extend(["--cssFile", str(request.content)])
    args.extend(["--outCssFile", str(request.output)])

    for path in _data_files(request):
        args.extend(["--data", str(path)])

    for resource, name in request.named_data.items():
        for path in resource.files:
            args.extend(["--namedData", f"{name}:{path}"])

    if request.additional_outputs:
        args.append("--additionalOutputs")
        args.extend(str(path) for path in request.additional_outputs)

    if request.sidecar is not None:
        args.extend(["--cssMapFile", str(request.sidecar)])
    if request.sidecar_output is not None:
        args.append("--sourcemap")
        args.extend(["--outCssMapFile", str(request.sidecar_output)])

    for plugin, options in request.plugins.items():
        args.extend(["--pluginRequires", plugin.require])
        args.extend(["--pluginArgs", options or EMPTY_PLUGIN_OPTIONS])

    return args


def declared_inputs(request: InvocationRequest) -> tuple[PurePosixPath, ...]:
    """Files the runner may read: the sources and every data file."""
    inputs = [request.content]
    if request.sidecar is not None:
        inputs.append(request.sidecar)
    for path in _data_files(request):
        if path not in inputs:
            inputs.append(path)
    return tuple(inputs)


def declared_outputs(request: InvocationRequest) -> tuple[PurePosixPath, ...]:
    """Files the runner must produce."""
    outputs = [request.output]
    if request.sidecar_output is not None:
        outputs.append(request.sidecar_output)
    outputs.extend(request.additional_outputs)
    return tuple(outputs)


def assemble_action(request: InvocationRequest) -> ActionSpec:
    """Describe the runner action for `request` without registering it."""
    arguments = tuple(build_arguments(request))
    inputs = declared_inputs(request)
    outputs = declared_outputs(request)
    for path in outputs:
        if path in inputs:
            raise OutputOverwritesInput(path)

    # A wrapper receives the runner as a tool and its path as the first argument.
    # Worker mode is unsupported in that case.
    if request.wrapper is not None:
        return ActionSpec(
            inputs=inputs,
            outputs=outputs,
            executable=request.wrapper,
            arguments=arguments,
            mnemonic=WRAPPER_MNEMONIC,
            progress_message=f"Running PostCSS wrapper on {request.content}",
            tools=(request.runner,),
        )

    return ActionSpec(
        inputs=inputs,
        outputs=outputs,
        executable=request.runner,
        arguments=arguments,
        mnemonic=RUNNER_MNEMONIC,
        progress_message=f"Running PostCSS runner on {request.content}",
        param_file=ParamFile(),
        execution_requirements={"supports-workers": "1"},
    )


def run_one(ctx: RuleContext, request: InvocationRequest) -> list[PurePosixPath]:
    """Register the runner action for `request` and return its outputs."""
    action = assemble_action(request)
    logger.debug("%s: declaring %s for %s", ctx.name, action.mnemonic, request.content)
    ctx.host.declare_action(action)
    return list(action.outputs)
