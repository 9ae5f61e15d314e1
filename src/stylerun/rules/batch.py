"""The many-stylesheet `postcss_multi_run` rule."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from stylerun.rules.assemble import assemble_action, declared_outputs
from stylerun.rules.errors import DuplicateOutput, OrphanSidecar
from stylerun.rules.named_data import reverse_named_data
from stylerun.rules.naming import expand_output_pattern, sourcemap_name, strip_extension
from stylerun.rules.types import (
    DEFAULT_OUTPUT_PATTERN,
    SIDECAR_EXTENSION,
    ActionSpec,
    DataResource,
    InvocationRequest,
    PluginSpec,
    SourcePair,
)

if TYPE_CHECKING:
    from stylerun.rules.types import RuleContext

logger = logging.getLogger(__name__)


def group_sources(srcs: Iterable[PurePosixPath | str]) -> list[SourcePair]:
    """Pair every source map with the stylesheet it was generated for.

    A map keys on its path minus the final extension, anything else keys on
    its own path. A stylesheet without a map is fine; a map without a
    stylesheet is not.
    """
    files_by_name: dict[str, list[PurePosixPath | None]] = {}
    for raw in srcs:
        path = PurePosixPath(raw)
        if path.suffix == SIDECAR_EXTENSION:
            files_by_name.setdefault(strip_extension(path), [None, None])[1] = path
        else:
            files_by_name.setdefault(str(path), [None, None])[0] = path

    pairs: list[SourcePair] = []
    for content, sidecar in files_by_name.values():
        if content is None:
            raise OrphanSidecar(sidecar)
        pairs.append(SourcePair(content=content, sidecar=sidecar))
    return pairs


def postcss_multi_run(
    ctx: RuleContext,
    *,
    srcs: Iterable[PurePosixPath | str],
    plugins: PluginSpec,
    runner: PurePosixPath | str,
    output_pattern: str = DEFAULT_OUTPUT_PATTERN,
    sourcemap: bool = False,
    data: Sequence[DataResource] = (),
    named_data: Mapping[str, DataResource] | None = None,
    wrapper: PurePosixPath | str | None = None,
) -> list[PurePosixPath]:
    """Compile each stylesheet in `srcs` with its own runner action.

    Every group is validated and assembled before the first action is
    registered, so a failing group leaves the host untouched.
    """
    resources_to_names = reverse_named_data(named_data or {})
    pairs = group_sources(srcs)

    actions: list[ActionSpec] = []
    owners: dict[PurePosixPath, PurePosixPath] = {}
    for pair in pairs:
        output_name = expand_output_pattern(output_pattern, pair.content, ctx.name)
        request = InvocationRequest(
            content=pair.content,
            sidecar=pair.sidecar,
            output=ctx.declare_file(output_name),
            sidecar_output=ctx.declare_file(sourcemap_name(output_name)) if sourcemap else None,
            plugins=dict(plugins),
            data=tuple(data),
            named_data=resources_to_names,
            runner=PurePosixPath(runner),
            wrapper=PurePosixPath(wrapper) if wrapper is not None else None,
            bin_dir=ctx.bin_dir,
        )
        for output in declared_outputs(request):
            if output in owners:
                raise DuplicateOutput(output, owners[output], pair.content)
            owners[output] = pair.content
        actions.append(assemble_action(request))

    outputs: list[PurePosixPath] = []
    for action in actions:
        logger.debug("%s: declaring %s for %s", ctx.name, action.mnemonic, action.inputs[0])
        ctx.host.declare_action(action)
        outputs.extend(action.outputs)
    return outputs
