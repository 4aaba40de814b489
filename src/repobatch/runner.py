# runner.py
from __future__ import annotations

import threading
from pathlib import Path
from typing import List, Optional

from .commands import run_command
from .context import Context, new_context
from .model import Batch, Job, Step, display_name
from .parser import load_batch, parse_batch
from .parallel import fan_out
from .remote.capability import RemoteCapability
from .responses import Outcome
from .ui.console import get_console

# command -> per-target outcomes
CommandResult = List[Outcome]
StepResult = List[CommandResult]
JobResult = List[StepResult]
BatchResult = List[JobResult]


# ----------------------------------------------------------------------
# Fan-out-and-collect recursion
# ----------------------------------------------------------------------

def run_step(
    step: Step,
    capability: RemoteCapability,
    ctx: Context,
    limiter: Optional[threading.Semaphore] = None,
) -> StepResult:
    ctx = ctx.with_step(step)
    get_console().print_step(display_name(ctx.job.name if ctx.job else None), display_name(step.name))
    return fan_out(
        lambda command: run_command(command, capability, ctx, limiter),
        step.runs,
    )


def run_job(
    job: Job,
    capability: RemoteCapability,
    ctx: Context,
    limiter: Optional[threading.Semaphore] = None,
) -> JobResult:
    # repositories are read by the commands through ctx.job, not here
    ctx = ctx.with_job(job)
    get_console().print_job_start(display_name(job.name), len(job.on_repositories))
    return fan_out(
        lambda step: run_step(step, capability, ctx, limiter),
        job.steps,
    )


def run_batch(
    batch: Batch,
    capability: RemoteCapability,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """
    Run every job of the batch concurrently and return the nested results:

        jobs -> steps -> commands -> outcomes (one per target)

    in declaration order at every level. Remote failures are leaves of the
    tree (Outcome.error); nothing aborts sibling work.

    max_workers bounds the remote calls in flight across the whole tree
    (None = no bound).
    """
    limiter = threading.BoundedSemaphore(max_workers) if max_workers else None
    get_console().print_batch_started(display_name(batch.name), batch.version, len(batch.jobs))
    return fan_out(
        lambda job: run_job(job, capability, new_context(batch), limiter),
        batch.jobs,
    )


def run_batch_from_bytes(
    data: bytes | str,
    capability: RemoteCapability,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """Parse then run. ParseError aborts before any job starts."""
    return run_batch(parse_batch(data), capability, max_workers)


# ----------------------------------------------------------------------
# Engine: holds the injected capability for the whole run
# ----------------------------------------------------------------------

class Engine:
    """Runs batches against one shared remote capability."""

    def __init__(self, capability: RemoteCapability, max_workers: Optional[int] = None):
        """
        Args:
            capability: Remote client shared by every concurrent command
            max_workers: Max remote calls in flight for a run (None = unbounded)
        """
        self.capability = capability
        self.max_workers = max_workers

    def run_batch(self, batch: Batch) -> BatchResult:
        return run_batch(batch, self.capability, self.max_workers)

    def run_batch_from_bytes(self, data: bytes | str) -> BatchResult:
        return run_batch_from_bytes(data, self.capability, self.max_workers)

    def run_batch_from_file(self, path: str | Path) -> BatchResult:
        """Read, parse and run. BatchIOError / ParseError abort the run."""
        return self.run_batch(load_batch(path))
