# agent/node.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple, TypeVar

T = TypeVar("T")


class Channel:
    """
    Execution context of a node.

    `call` runs a callable where the node lives and returns its result. A
    callable sent through a channel must only rely on its own attributes and
    the node's process state (environment, filesystem), never on controller
    objects.
    """

    def call(self, fn: Callable[[], T]) -> T:
        raise NotImplementedError


class LocalChannel(Channel):
    """Channel for the node this process runs on."""

    def call(self, fn: Callable[[], T]) -> T:
        return fn()


@dataclass(frozen=True)
class Node:
    """
    A machine able to run a build step.

    Args:
        name: Node name ("built-in" for the controller itself)
        tool_locations: Per-installation home overrides on this node
            (mapping or NAME, HOME pairs),
            keyed by installation name
    """
    name: str = "built-in"
    tool_locations: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        # stored as sorted pairs so nodes stay hashable
        locations = self.tool_locations
        if isinstance(locations, Mapping):
            locations = locations.items()
        object.__setattr__(self, "tool_locations", tuple(sorted((str(k), str(v)) for k, v in locations)))

    def tool_home(self, installation_name: str) -> Optional[str]:
        return dict(self.tool_locations).get(installation_name)
