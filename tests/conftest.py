from __future__ import annotations

import io
import os
import stat
from pathlib import Path

import pytest

from gradlestep.agent.launcher import Launcher
from gradlestep.descriptor import GradleBuilderDescriptor, set_descriptor
from gradlestep.installations import InstallationStore
from gradlestep.ui.console import Console


class RecordingLauncher(Launcher):
    """Records launches instead of starting processes."""

    def __init__(self, is_unix: bool = True, exit_code: int = 0, error: OSError | None = None):
        super().__init__(is_unix=is_unix)
        self.exit_code = exit_code
        self.error = error
        self.launches: list[dict] = []

    def launch(self, args, *, env, pwd, stdout):
        self.launches.append({"args": list(args), "env": dict(env), "pwd": pwd})
        if self.error is not None:
            raise self.error
        return self.exit_code

    @property
    def last(self) -> dict:
        return self.launches[-1]


@pytest.fixture
def log() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(log) -> Console:
    return Console(stream=log)


@pytest.fixture
def descriptor():
    d = GradleBuilderDescriptor(InstallationStore())
    set_descriptor(d)
    yield d
    set_descriptor(GradleBuilderDescriptor())


@pytest.fixture
def gradle_home(tmp_path) -> Path:
    """A fake Gradle distribution with an executable bin/gradle."""
    home = tmp_path / "gradle-4.0"
    (home / "bin").mkdir(parents=True)
    exe = home / "bin" / ("gradle.bat" if os.name == "nt" else "gradle")
    exe.write_text("#!/bin/sh\nexit 0\n")
    exe.chmod(exe.stat().st_mode | stat.S_IEXEC)
    return home
