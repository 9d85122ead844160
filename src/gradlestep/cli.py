# cli.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Iterable

import click

from gradlestep import settings
from gradlestep.agent.launcher import LocalLauncher
from gradlestep.agent.node import Node
from gradlestep.builder import get_gradle, perform
from gradlestep.descriptor import (
    FormError,
    GradleBuilderDescriptor,
    GradleInstallationDescriptor,
    set_descriptor,
)
from gradlestep.installations import load_store
from gradlestep.model import Build
from gradlestep.ui.console import Console, get_console, set_console


def parse_pairs(values: Iterable[str], option: str) -> Dict[str, str]:
    """
    Parse repeated KEY=VALUE options, keeping their order.

    Raises:
        click.BadParameter: If a value has no '='
    """
    pairs: Dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint=option)
        pairs[key] = value
    return pairs


def load_descriptor(path: str) -> GradleBuilderDescriptor:
    console = get_console()
    try:
        store = load_store(path)
    except ValueError as e:
        # also covers json.JSONDecodeError
        console.print_error(
            "Invalid installations file",
            f"Could not read Gradle installations from {path}",
            details=[str(e)],
            suggestion="Fix or remove the file, then add installations again:\n  gradlestep installations add <name> <home>",
        )
        sys.exit(1)
    descriptor = GradleBuilderDescriptor(store)
    set_descriptor(descriptor)
    return descriptor


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option(
    "--installations",
    "installations_file",
    default=settings.INSTALLATIONS_FILE,
    show_default=True,
    help="JSON file holding the configured Gradle installations",
)
@click.pass_context
def cli(ctx, debug, installations_file):
    """gradlestep: run Gradle as a CI build step."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["installations_file"] = installations_file


@cli.command()
@click.option("--gradle", "gradle_name", default=None, help="Name of the Gradle installation to use")
@click.option("--switches", default=None, help="Gradle command line switches")
@click.option("--tasks", default=None, help="Gradle tasks to run")
@click.option("--build-file", default=None, help="Build file path, relative to the working directory")
@click.option("--root-build-script-dir", default=None, help="Working directory, relative to the module root")
@click.option("--description", default=None, help="Step description")
@click.option("-D", "--define", "defines", multiple=True, metavar="KEY=VALUE", help="Build variable (repeatable)")
@click.option("-e", "--env", "env_pairs", multiple=True, metavar="KEY=VALUE", help="Extra environment variable (repeatable)")
@click.option("--tool-location", "tool_locations", multiple=True, metavar="NAME=HOME", help="Installation home on this node (repeatable)")
@click.option("--node", "node_name", default=settings.NODE_NAME, show_default=True, help="Name of this node")
@click.option("--module-root", default=".", show_default=True, help="Module root directory")
@click.pass_context
def run(
    ctx,
    gradle_name,
    switches,
    tasks,
    build_file,
    root_build_script_dir,
    description,
    defines,
    env_pairs,
    tool_locations,
    node_name,
    module_root,
):
    """Run one Gradle build step."""
    console = get_console()
    descriptor = load_descriptor(ctx.obj["installations_file"])

    try:
        step = descriptor.new_instance({
            "description": description,
            "switches": switches,
            "tasks": tasks,
            "buildFile": build_file,
            "rootBuildScriptDir": root_build_script_dir,
            "gradleName": gradle_name,
        })
        build = Build(
            module_root=Path(module_root).resolve(),
            node=Node(name=node_name, tool_locations=parse_pairs(tool_locations, "--tool-location")),
            build_variables=parse_pairs(defines, "--define"),
            extra_env=parse_pairs(env_pairs, "--env"),
        )
    except FormError as e:
        console.print_error("Invalid step configuration", str(e))
        sys.exit(1)

    selected = get_gradle(step, descriptor)
    console.print_run_started(
        step=step.description or descriptor.display_name,
        gradle=selected.name if selected else "(default)",
        module_root=str(build.module_root),
    )

    try:
        ok = perform(step, build, LocalLauncher(), console, descriptor)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    console.print_result(ok)
    if not ok:
        sys.exit(1)


@cli.group()
def installations():
    """Manage configured Gradle installations."""


@installations.command("list")
@click.pass_context
def list_installations(ctx):
    """List configured installations."""
    console = get_console()
    descriptor = load_descriptor(ctx.obj["installations_file"])
    if not descriptor.installations:
        console.print_info("No Gradle installations configured.")
        return
    for inst in descriptor.installations:
        console.print_info(f"{inst.name}\t{inst.home}")


@installations.command("add")
@click.argument("name")
@click.argument("home")
@click.pass_context
def add_installation(ctx, name, home):
    """Add (or replace) an installation NAME located at HOME."""
    console = get_console()
    descriptor = load_descriptor(ctx.obj["installations_file"])
    tool = GradleInstallationDescriptor(descriptor)

    try:
        inst = tool.new_installation({"name": name, "home": home})
    except FormError as e:
        console.print_error("Invalid installation", str(e))
        sys.exit(1)

    kept = [i for i in tool.installations if i.name != inst.name]
    tool.set_installations(*kept, inst)
    console.print_info(f"Saved Gradle installation '{inst.name}' ({inst.home})")


@installations.command("remove")
@click.argument("name")
@click.pass_context
def remove_installation(ctx, name):
    """Remove the installation NAME."""
    console = get_console()
    descriptor = load_descriptor(ctx.obj["installations_file"])

    kept = [i for i in descriptor.installations if i.name != name]
    if len(kept) == len(descriptor.installations):
        console.print_error(
            "Unknown installation",
            f"No Gradle installation named '{name}'.",
            suggestion="List configured installations:\n  gradlestep installations list",
        )
        sys.exit(1)
    descriptor.set_installations(*kept)
    console.print_info(f"Removed Gradle installation '{name}'")


if __name__ == "__main__":
    cli()
