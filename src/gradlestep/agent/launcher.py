# agent/launcher.py
from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence, TextIO, cast

from gradlestep.ui.console import Console

from .node import Channel, LocalChannel


def format_command(args: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in args)


class Launcher:
    """
    Starts processes on a node.

    `is_unix` describes the node the process runs on, which is not
    necessarily the machine running this code.
    """

    def __init__(self, is_unix: bool, channel: Optional[Channel] = None):
        self.is_unix = is_unix
        self.channel = channel if channel is not None else LocalChannel()

    def launch(
        self,
        args: Sequence[str],
        *,
        env: Mapping[str, str],
        pwd: Path,
        stdout: Console,
    ) -> int:
        """
        Run `args` to completion and return the exit code.

        Raises:
            OSError: If the process could not be started
        """
        raise NotImplementedError


class LocalLauncher(Launcher):
    """Launcher for the local machine, built on subprocess.Popen."""

    def __init__(self, is_unix: Optional[bool] = None):
        super().__init__(is_unix=(os.name != "nt") if is_unix is None else is_unix)

    def launch(
        self,
        args: Sequence[str],
        *,
        env: Mapping[str, str],
        pwd: Path,
        stdout: Console,
    ) -> int:
        stdout.print_command(str(pwd), format_command(args))

        proc = subprocess.Popen(
            list(args),
            cwd=str(pwd),
            env=dict(env),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        # stream output to the job log as it is produced
        try:
            with cast(TextIO, proc.stdout) as out:
                for line in out:
                    stdout.write(line)
        except BaseException:
            # the child never outlives an aborted step
            proc.kill()
            proc.wait()
            raise
        return proc.wait()
