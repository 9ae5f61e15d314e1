"""The single-stylesheet `postcss_run` rule."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from stylerun.rules.assemble import run_one
from stylerun.rules.classify import classify_inputs
from stylerun.rules.named_data import reverse_named_data
from stylerun.rules.naming import default_output_name, sourcemap_name
from stylerun.rules.types import DataResource, InvocationRequest, PluginSpec

if TYPE_CHECKING:
    from stylerun.rules.types import RuleContext


def postcss_run(
    ctx: RuleContext,
    *,
    src: Iterable[PurePosixPath | str],
    plugins: PluginSpec,
    runner: PurePosixPath | str,
    output_name: str = "",
    additional_outputs: Sequence[str] = (),
    sourcemap: bool = False,
    data: Sequence[DataResource] = (),
    named_data: Mapping[str, DataResource] | None = None,
    wrapper: PurePosixPath | str | None = None,
) -> list[PurePosixPath]:
    """Compile one stylesheet (and its optional source map) to one output."""
    resources_to_names = reverse_named_data(named_data or {})
    pair = classify_inputs(src)

    css_name = default_output_name(ctx.name, output_name)
    request = InvocationRequest(
        content=pair.content,
        sidecar=pair.sidecar,
        output=ctx.declare_file(css_name),
        sidecar_output=ctx.declare_file(sourcemap_name(css_name)) if sourcemap else None,
        additional_outputs=tuple(ctx.declare_file(name) for name in additional_outputs),
        plugins=dict(plugins),
        data=tuple(data),
        named_data=resources_to_names,
        runner=PurePosixPath(runner),
        wrapper=PurePosixPath(wrapper) if wrapper is not None else None,
        bin_dir=ctx.bin_dir,
    )
    return run_one(ctx, request)
