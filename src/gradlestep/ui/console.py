"""Console output formatting utilities for gradlestep."""

from __future__ import annotations

import sys
import traceback
from typing import Optional, Sequence, TextIO


class Console:
    """
    Centralized console output, also used as the job log of a build step.

    Child process output is copied to `stream` as it arrives, so
    everything a step produces ends up in one stream.
    """

    def __init__(self, debug: bool = False, stream: Optional[TextIO] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            stream: Log stream (defaults to the current sys.stdout)
        """
        self.debug = debug
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # resolved lazily so redirected stdout (pytest capture, CliRunner) is honoured
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def print_run_started(
        self,
        step: str,
        gradle: str,
        module_root: str,
    ) -> None:
        """Print step start information."""
        print("\nSTEP STARTED", file=self.stream)
        print(f"Step: {step}", file=self.stream)
        print(f"Gradle: {gradle}", file=self.stream)
        print(f"Module root: {module_root}", file=self.stream)
        print(file=self.stream)

    def print_command(self, pwd: str, command: str) -> None:
        """Print the command line about to be launched."""
        print(f"[{pwd}] $ {command}", file=self.stream)

    def print_result(self, ok: bool) -> None:
        """Print the final step status."""
        print(f"STATUS: {'success' if ok else 'failed'}", file=self.stream)

    def fatal_error(self, message: str) -> TextIO:
        """
        Print a fatal error.

        Returns the log stream so callers can append details, e.g.
        ``traceback.print_exc(file=console.fatal_error("..."))``.
        """
        print(f"FATAL: {message}", file=self.stream)
        return self.stream

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[Sequence[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message, file=self.stream)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=self.stream)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
