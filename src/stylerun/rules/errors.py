"""Validation errors raised while evaluating PostCSS rules."""

from __future__ import annotations

ERROR_INPUT_NO_PLUGINS = "No plugins were provided"
ERROR_INPUT_NO_CSS = "Input of one file must be of a .css file"
ERROR_INPUT_TWO_FILES = "Input of two files must be of a .css and .css.map file"
ERROR_INPUT_TOO_MANY = "Input must be up to two files, a .css file, and optionally a .css.map file"

REASON_NO_PLUGINS = "NO_PLUGINS"
REASON_TOO_MANY_INPUTS = "TOO_MANY_INPUTS"
REASON_DUPLICATE_CONTENT = "DUPLICATE_CONTENT"
REASON_DUPLICATE_SIDECAR = "DUPLICATE_SIDECAR"
REASON_MISSING_CONTENT = "MISSING_CONTENT"
REASON_DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
REASON_ORPHAN_SIDECAR = "ORPHAN_SIDECAR"
REASON_DUPLICATE_OUTPUT = "DUPLICATE_OUTPUT"
REASON_OUTPUT_OVERWRITES_INPUT = "OUTPUT_OVERWRITES_INPUT"


class RuleError(ValueError):
    """Static validation failure of a rule declaration."""

    reason_code: str = "RULE_INVALID"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NoPluginsProvided(RuleError):
    reason_code = REASON_NO_PLUGINS

    def __init__(self) -> None:
        super().__init__(ERROR_INPUT_NO_PLUGINS)


class TooManyInputs(RuleError):
    reason_code = REASON_TOO_MANY_INPUTS

    def __init__(self, count: int) -> None:
        super().__init__(f"{ERROR_INPUT_TOO_MANY} (got {count})")
        self.count = count


class DuplicateContentFile(RuleError):
    reason_code = REASON_DUPLICATE_CONTENT

    def __init__(self, path: object) -> None:
        super().__init__(f"{ERROR_INPUT_TWO_FILES}: second .css file {path}")
        self.path = path


class DuplicateSidecarFile(RuleError):
    reason_code = REASON_DUPLICATE_SIDECAR

    def __init__(self, path: object) -> None:
        super().__init__(f"{ERROR_INPUT_TWO_FILES}: second .map file {path}")
        self.path = path


class MissingContentFile(RuleError):
    reason_code = REASON_MISSING_CONTENT

    def __init__(self) -> None:
        super().__init__(ERROR_INPUT_NO_CSS)


class DuplicateResourceTarget(RuleError):
    reason_code = REASON_DUPLICATE_RESOURCE

    def __init__(self, label: str) -> None:
        super().__init__(f'Values in named_data must be unique. "{label}" was used twice.')
        self.label = label


class OrphanSidecar(RuleError):
    reason_code = REASON_ORPHAN_SIDECAR

    def __init__(self, path: object) -> None:
        super().__init__(f"Source map file {path} was passed without a corresponding CSS file.")
        self.path = path


class DuplicateOutput(RuleError):
    reason_code = REASON_DUPLICATE_OUTPUT

    def __init__(self, path: object, first: object, second: object) -> None:
        super().__init__(f"Output {path} is declared for both {first} and {second}.")
        self.path = path


class OutputOverwritesInput(RuleError):
    reason_code = REASON_OUTPUT_OVERWRITES_INPUT

    def __init__(self, path: object) -> None:
        super().__init__(f"Output {path} is also an input; choose another bin_dir or output name.")
        self.path = path
