# context.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .model import Batch, Job, Step


@dataclass(frozen=True)
class Context:
    """
    Read-only view of where a running unit sits in the batch.

    `batch` is always set; `job` once execution entered a job; `step` once it
    entered a step. Each level gets a new value, parents are never mutated,
    so concurrent siblings never see each other's context.
    """
    batch: Batch
    job: Optional[Job] = None
    step: Optional[Step] = None

    def with_job(self, job: Job) -> Context:
        return replace(self, job=job)

    def with_step(self, step: Step) -> Context:
        return replace(self, step=step)


def new_context(batch: Batch) -> Context:
    return Context(batch=batch)


def with_job(ctx: Context, job: Job) -> Context:
    return ctx.with_job(job)


def with_step(ctx: Context, step: Step) -> Context:
    return ctx.with_step(step)
