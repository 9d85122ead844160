# builder.py
from __future__ import annotations

import traceback
from typing import Optional

from .agent.launcher import Launcher
from .command import build_arguments, working_directory
from .descriptor import GradleBuilderDescriptor, get_descriptor
from .installations import find_installation
from .model import Build, GradleBuilder, GradleInstallation, Invocation
from .resolver import default_executable, resolve
from .ui.console import Console

TOOL_HINT = "Install Gradle or fix PATH, or select a configured Gradle installation."


class MissingExecutable(Exception):
    """A configured installation has no gradle executable on the node."""

    def __init__(self, installation: GradleInstallation, node: str):
        self.installation = installation
        self.node = node
        super().__init__(
            f"Gradle installation '{installation.name}' has no executable under "
            f"{installation.home}/bin on node '{node}'"
        )


def get_gradle(
    step: GradleBuilder,
    descriptor: Optional[GradleBuilderDescriptor] = None,
) -> Optional[GradleInstallation]:
    """The installation selected by the step, or None to invoke the default one."""
    descriptor = descriptor or get_descriptor()
    return find_installation(descriptor.installations, step.gradle_name)


def prepare(
    step: GradleBuilder,
    build: Build,
    launcher: Launcher,
    listener: Console,
    descriptor: Optional[GradleBuilderDescriptor] = None,
) -> Invocation:
    """
    Resolve the installation and assemble what to launch.

    Raises:
        MissingExecutable: If the selected installation is missing on the node
        ValueError: If switches or tasks cannot be tokenized
    """
    descriptor = descriptor or get_descriptor()
    env = build.get_environment()

    # one snapshot for the whole resolution
    resolution = resolve(
        descriptor.installations,
        step.gradle_name,
        build,
        launcher,
        listener,
        environment=env,
    )
    if resolution.is_default:
        executable = default_executable(launcher.is_unix)
    elif resolution.executable is None:
        raise MissingExecutable(resolution.installation, build.node.name)
    else:
        executable = resolution.executable

    args = build_arguments(
        executable,
        is_unix=launcher.is_unix,
        switches=step.switches,
        tasks=step.tasks,
        build_file=step.build_file,
        build_variables=build.build_variables,
        environment=env,
    )

    if resolution.installation is not None:
        env["GRADLE_HOME"] = resolution.installation.home

    pwd = working_directory(
        build.module_root,
        step.root_build_script_dir,
        env,
        build.build_variable_resolver,
    )
    return Invocation(args=args.to_list(), env=env, pwd=pwd)


def perform(
    step: GradleBuilder,
    build: Build,
    launcher: Launcher,
    listener: Console,
    descriptor: Optional[GradleBuilderDescriptor] = None,
) -> bool:
    """
    Run one Gradle build step.

    Returns:
        True if Gradle exited with code 0, False on any failure (missing
        executable, bad switches, launch error, non-zero exit)
    """
    try:
        invocation = prepare(step, build, launcher, listener, descriptor)
    except MissingExecutable as e:
        listener.fatal_error(str(e))
        return False
    except ValueError as e:
        listener.fatal_error(f"invalid Gradle command line: {e}")
        return False

    try:
        r = launcher.launch(
            invocation.args,
            env=invocation.env,
            pwd=invocation.pwd,
            stdout=listener,
        )
    except OSError as e:
        if isinstance(e, FileNotFoundError) and e.filename == invocation.args[0]:
            listener.print_info(f"Hint: {TOOL_HINT}")
        traceback.print_exception(type(e), e, e.__traceback__, file=listener.fatal_error("command execution failed"))
        return False

    return r == 0
