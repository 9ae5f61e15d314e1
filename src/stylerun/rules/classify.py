"""Split a rule's `src` files into a stylesheet and its optional source map."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import PurePosixPath

from stylerun.rules.errors import (
    DuplicateContentFile,
    DuplicateSidecarFile,
    MissingContentFile,
    TooManyInputs,
)
from stylerun.rules.types import CONTENT_EXTENSION, SIDECAR_EXTENSION, SourcePair

logger = logging.getLogger(__name__)

MAX_INPUTS = 2


def classify_inputs(files: Iterable[PurePosixPath | str]) -> SourcePair:
    """Return the .css file and the optional .map file among `files`.

    Files with any other extension are skipped, not rejected.
    """
    file_list = [PurePosixPath(f) for f in files]
    if len(file_list) > MAX_INPUTS:
        raise TooManyInputs(len(file_list))

    content: PurePosixPath | None = None
    sidecar: PurePosixPath | None = None
    for path in file_list:
        if path.suffix == CONTENT_EXTENSION:
            if content is not None:
                raise DuplicateContentFile(path)
            content = path
            continue
        if path.suffix == SIDECAR_EXTENSION:
            if sidecar is not None:
                raise DuplicateSidecarFile(path)
            sidecar = path
            continue
        logger.warning("ignoring input %s: not a .css or .map file", path)

    if content is None:
        raise MissingContentFile()
    return SourcePair(content=content, sidecar=sidecar)
