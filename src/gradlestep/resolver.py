# resolver.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import PurePosixPath, PureWindowsPath
from typing import Iterable, Mapping, Optional

from .agent.launcher import Launcher
from .agent.node import Node
from .installations import find_installation
from .macro import replace_macro
from .model import Build, GradleInstallation
from .ui.console import Console

UNIX_EXECUTABLE = "gradle"
WINDOWS_EXECUTABLE = "gradle.bat"


def default_executable(is_unix: bool) -> str:
    """Bare command used when no installation is selected (looked up on PATH)."""
    return UNIX_EXECUTABLE if is_unix else WINDOWS_EXECUTABLE


# ----------------------------------------------------------------------
# Specialization (always returns a new installation)
# ----------------------------------------------------------------------

def for_node(installation: GradleInstallation, node: Node, listener: Console) -> GradleInstallation:
    home = node.tool_home(installation.name)
    if home is None:
        return installation.with_home(installation.home)
    listener.print_debug(f"Gradle '{installation.name}' on node '{node.name}': {home}")
    return installation.with_home(home)


def for_environment(installation: GradleInstallation, environment: Mapping[str, str]) -> GradleInstallation:
    return installation.with_home(replace_macro(installation.home, environment))


# ----------------------------------------------------------------------
# Executable lookup, evaluated on the node
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class ExecutableProbe:
    """
    Sent through a node's channel: finds `<home>/bin/gradle[.bat]` there.

    The home is expanded against the node's own environment and the
    executable name follows the node's platform.
    """
    home: str

    def __call__(self) -> Optional[str]:
        windows = os.name == "nt"
        home = replace_macro(self.home, os.environ)
        exe_name = WINDOWS_EXECUTABLE if windows else UNIX_EXECUTABLE
        path_cls = PureWindowsPath if windows else PurePosixPath
        exe = str(path_cls(home) / "bin" / exe_name)
        if os.path.exists(exe):
            return exe
        return None


def get_executable(installation: GradleInstallation, launcher: Launcher) -> Optional[str]:
    return launcher.channel.call(ExecutableProbe(installation.home))


# ----------------------------------------------------------------------
# Resolution
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Resolution:
    """
    Outcome of resolving an installation name.

    installation is None: nothing selected, run the bare default command.
    installation set, executable None: configured but missing on the node.
    """
    installation: Optional[GradleInstallation] = None
    executable: Optional[str] = None

    @property
    def is_default(self) -> bool:
        return self.installation is None

    @property
    def found(self) -> bool:
        return self.installation is not None and self.executable is not None


def resolve(
    installations: Iterable[GradleInstallation],
    name: Optional[str],
    build: Build,
    launcher: Launcher,
    listener: Console,
    *,
    environment: Optional[Mapping[str, str]] = None,
) -> Resolution:
    inst = find_installation(installations, name)
    if inst is None:
        # unknown names fall back to the default command on purpose
        return Resolution()

    env = environment if environment is not None else build.get_environment()
    inst = for_node(inst, build.node, listener)
    inst = for_environment(inst, env)
    return Resolution(installation=inst, executable=get_executable(inst, launcher))
