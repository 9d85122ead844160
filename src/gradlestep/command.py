# command.py
from __future__ import annotations

import re
import shlex
from pathlib import Path
from typing import List, Mapping, Optional

from .macro import Resolver, replace_macro

_WHITESPACE = re.compile(r"[\t\r\n]+")


def normalize(text: Optional[str]) -> str:
    """Collapse tabs and line breaks into single spaces (multi-line form input)."""
    if text is None:
        return ""
    return _WHITESPACE.sub(" ", text)


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


class ArgumentListBuilder:
    """Ordered list of command line tokens."""

    def __init__(self, *args: str):
        self._args: List[str] = list(args)

    def add(self, *args: str) -> ArgumentListBuilder:
        self._args.extend(str(a) for a in args)
        return self

    def add_tokenized(self, text: str) -> ArgumentListBuilder:
        # Split args string into list, handling quoted strings
        self._args.extend(shlex.split(text))
        return self

    def add_key_value_pairs(self, prefix: str, pairs: Mapping[str, str]) -> ArgumentListBuilder:
        for key, value in pairs.items():
            self._args.append(f"{prefix}{key}={value}")
        return self

    def prepend(self, *args: str) -> ArgumentListBuilder:
        self._args[:0] = [str(a) for a in args]
        return self

    def to_list(self) -> List[str]:
        return list(self._args)

    def to_string(self) -> str:
        return " ".join(shlex.quote(a) for a in self._args)

    def __iter__(self):
        return iter(self._args)

    def __len__(self) -> int:
        return len(self._args)

    def __str__(self) -> str:
        return self.to_string()


def build_arguments(
    executable: str,
    *,
    is_unix: bool,
    switches: Optional[str],
    tasks: Optional[str],
    build_file: Optional[str],
    build_variables: Mapping[str, str],
    environment: Mapping[str, str],
) -> ArgumentListBuilder:
    """
    Assemble the Gradle command line.

    Order: executable, -D<key>=<value> per build variable, switches, tasks,
    then `-b <build file>`. Switches are expanded against the environment and
    then the build variables; tasks are left unexpanded. On Windows the whole
    line is wrapped in `cmd.exe /C ... && exit %%ERRORLEVEL%%` so the exit code
    of the batch file survives.

    Raises:
        ValueError: If switches or tasks contain unbalanced quotes
    """
    normalized_switches = normalize(switches)
    normalized_switches = replace_macro(normalized_switches, environment)
    normalized_switches = replace_macro(normalized_switches, build_variables)

    normalized_tasks = normalize(tasks)

    args = ArgumentListBuilder(executable)
    args.add_key_value_pairs("-D", build_variables)
    args.add_tokenized(normalized_switches)
    args.add_tokenized(normalized_tasks)

    if not _is_blank(build_file):
        args.add("-b", replace_macro(build_file.strip(), environment))

    if not is_unix:
        # double %% so ERRORLEVEL is expanded after the batch file ran, not before
        args.prepend("cmd.exe", "/C")
        args.add("&&", "exit", "%%ERRORLEVEL%%")

    return args


def working_directory(
    module_root: Path,
    root_build_script_dir: Optional[str],
    environment: Mapping[str, str],
    build_variable_resolver: Resolver,
) -> Path:
    """Module root, or `root_build_script_dir` (expanded) relative to it."""
    if _is_blank(root_build_script_dir):
        return Path(module_root)
    normalized = replace_macro(root_build_script_dir.strip(), environment)
    normalized = replace_macro(normalized, build_variable_resolver)
    return Path(module_root) / normalized
