"""Narrow interface between rule evaluation and the build host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from stylerun.rules.types import ActionSpec


class ActionHost(Protocol):
    """Anything that accepts declared runner actions."""

    def declare_action(self, action: ActionSpec) -> None: ...


class RecordingHost:
    """Host that keeps declared actions in declaration order."""

    def __init__(self) -> None:
        self.actions: list[ActionSpec] = []

    def declare_action(self, action: ActionSpec) -> None:
        self.actions.append(action)

    def outputs(self) -> list[str]:
        return [str(path) for action in self.actions for path in action.outputs]
