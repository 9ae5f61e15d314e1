"""Inversion of the user-facing `named_data` mapping."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from stylerun.rules.errors import DuplicateResourceTarget

_R = TypeVar("_R")


def reverse_named_data(names_to_resources: Mapping[str, _R]) -> dict[_R, str]:
    """Reverse `named_data` from names-to-resources to resources-to-names.

    Names are the natural keys for users, but the runner is driven per
    resource, so each resource must carry exactly one name.
    """
    resources_to_names: dict[_R, str] = {}
    for name, resource in names_to_resources.items():
        if resource in resources_to_names:
            raise DuplicateResourceTarget(_label_of(resource))
        resources_to_names[resource] = name
    return resources_to_names


def _label_of(resource: object) -> str:
    label = getattr(resource, "label", None)
    return str(label if label is not None else resource)
