"""PostCSS rule evaluation: input classification and runner argument assembly."""

from stylerun.rules.assemble import assemble_action, build_arguments, declared_inputs, declared_outputs, run_one
from stylerun.rules.batch import group_sources, postcss_multi_run
from stylerun.rules.classify import classify_inputs
from stylerun.rules.errors import (
    DuplicateContentFile,
    DuplicateOutput,
    DuplicateResourceTarget,
    DuplicateSidecarFile,
    MissingContentFile,
    NoPluginsProvided,
    OrphanSidecar,
    OutputOverwritesInput,
    RuleError,
    TooManyInputs,
)
from stylerun.rules.named_data import reverse_named_data
from stylerun.rules.naming import expand_output_pattern
from stylerun.rules.run import postcss_run

__all__ = [
    "DuplicateContentFile",
    "DuplicateOutput",
    "DuplicateResourceTarget",
    "DuplicateSidecarFile",
    "MissingContentFile",
    "NoPluginsProvided",
    "OrphanSidecar",
    "OutputOverwritesInput",
    "RuleError",
    "TooManyInputs",
    "assemble_action",
    "build_arguments",
    "classify_inputs",
    "declared_inputs",
    "declared_outputs",
    "expand_output_pattern",
    "group_sources",
    "postcss_multi_run",
    "postcss_run",
    "reverse_named_data",
    "run_one",
]
