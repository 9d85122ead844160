# model.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .agent.node import Node


def _launder_home(home: str) -> str:
    # Gradle (like Ant) does not like a trailing separator, especially on Windows
    if home.endswith("/") or home.endswith("\\"):
        return home[:-1]
    return home


@dataclass(frozen=True)
class GradleInstallation:
    """A named, configured location of a Gradle distribution."""
    name: str
    home: str
    properties: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to store the laundered home
        object.__setattr__(self, "home", _launder_home(self.home or ""))
        object.__setattr__(self, "properties", tuple(self.properties or ()))

    def with_home(self, home: str) -> GradleInstallation:
        return GradleInstallation(name=self.name, home=home, properties=self.properties)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "home": self.home}
        if self.properties:
            data["properties"] = list(self.properties)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GradleInstallation:
        return cls(
            name=str(data["name"]),
            home=str(data.get("home", "")),
            properties=tuple(data.get("properties", ()) or ()),
        )


@dataclass(frozen=True)
class GradleBuilder:
    """
    Settings of one "Invoke Gradle script" build step.

    Every field is optional; blank values mean "not set".
    """
    description: Optional[str] = None
    switches: Optional[str] = None
    tasks: Optional[str] = None
    root_build_script_dir: Optional[str] = None
    build_file: Optional[str] = None
    gradle_name: Optional[str] = None


@dataclass
class Build:
    """
    The pipeline execution a step runs in.

    `environment` is the full step environment. When not given it starts from
    a copy of os.environ (plus `extra_env`), like a job's steps see it.
    """
    module_root: Path
    node: Node = field(default_factory=Node)
    build_variables: Dict[str, str] = field(default_factory=dict)
    environment: Optional[Dict[str, str]] = None
    extra_env: Dict[str, str] = field(default_factory=dict)

    def get_environment(self) -> Dict[str, str]:
        if self.environment is not None:
            env = dict(self.environment)
        else:
            env = os.environ.copy()
        env.update(self.extra_env)
        return env

    @property
    def build_variable_resolver(self) -> Callable[[str], Optional[str]]:
        return self.build_variables.get


@dataclass
class Invocation:
    """Argument vector + environment + working directory for one launch."""
    args: List[str]
    env: Dict[str, str]
    pwd: Path
