"""Console output formatting utilities for repobatch."""

from __future__ import annotations

import sys
import threading
from typing import Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, quiet: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            quiet: If True, suppress progress lines (errors still go to stderr)
        """
        self.debug = debug
        self.quiet = quiet
        # jobs, steps and targets report from worker threads
        self._lock = threading.Lock()

    def _out(self, message: str, err: bool = False) -> None:
        with self._lock:
            print(message, file=sys.stderr if err else sys.stdout)

    def print_authenticated(self, login: str) -> None:
        """Print authentication success."""
        if self.quiet:
            return
        self._out(f"Authenticated to GitHub as: {login}")

    def print_batch_started(self, name: str, version: str, job_count: int) -> None:
        """Print batch start information."""
        if self.quiet:
            return
        self._out(f"\nBATCH STARTED: {name}\nVersion: {version}\nJobs: {job_count}\n")

    def print_job_start(self, name: str, targets: int) -> None:
        """Print job start message."""
        if self.quiet:
            return
        self._out(f"JOB: {name} ({targets} repositories)")

    def print_step(self, job: str, name: str) -> None:
        """Print step start message."""
        if self.quiet:
            return
        self._out(f"[{job}] STEP: {name}")

    def print_failure(self, command: str, reason: str, target: Optional[str] = None) -> None:
        """
        Print a failed remote call.

        Args:
            command: Command kind (e.g. create-label)
            reason: Failure reason/error message
            target: Optional repository full name
        """
        where = f" on {target}" if target else ""
        if self.debug:
            self._out(f"FAILED: {command}{where}\nError details: {reason}", err=True)
        else:
            # first line only outside debug mode
            error_line = reason.split("\n")[0] if reason else "Unknown error"
            self._out(f"FAILED: {command}{where}: {error_line}", err=True)

    def print_skipped(self, command: str, reason: str) -> None:
        """Print a skipped (no-op) command."""
        if self.quiet:
            return
        self._out(f"SKIPPED: {command} ({reason})")

    def print_plan(self, lines: list[str]) -> None:
        """Print a batch plan (one line per job/step/command)."""
        for line in lines:
            self._out(line)

    def print_results(self, total: int, succeeded: int, failed: int, skipped: int) -> None:
        """Print final results summary."""
        self._out(
            "\n" + "=" * 40 + "\nRESULTS\n" + "=" * 40
            + f"\n  total: {total}\n  succeeded: {succeeded}"
            + f"\n  failed: {failed}\n  skipped: {skipped}"
        )

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
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
        lines = [f"\nERROR: {title}", message]
        if details:
            lines.extend(f"  {detail}" for detail in details)
        if suggestion:
            lines.append(f"\n{suggestion}")
        self._out("\n".join(lines), err=True)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            self._out(f"Error: {exc}", err=True)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._out(message)


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
