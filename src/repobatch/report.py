# report.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, NamedTuple, Tuple

from .model import Batch
from .responses import Outcome


class ResultPath(NamedTuple):
    """Position of a leaf in the result tree."""
    job: int
    step: int
    command: int
    target: int


@dataclass(frozen=True)
class Summary:
    total: int
    succeeded: int
    failed: int
    skipped: int

    @property
    def ok(self) -> bool:
        return self.failed == 0


def iter_outcomes(results: List[List[List[List[Outcome]]]]) -> Iterator[Tuple[ResultPath, Outcome]]:
    """Flattened view of the nested results, in declaration order."""
    for j, job in enumerate(results):
        for s, step in enumerate(job):
            for c, command in enumerate(step):
                for t, outcome in enumerate(command):
                    yield ResultPath(j, s, c, t), outcome


def summarize(results: List[List[List[List[Outcome]]]]) -> Summary:
    total = succeeded = failed = skipped = 0
    for _path, outcome in iter_outcomes(results):
        total += 1
        if not outcome.ok:
            failed += 1
        elif outcome.skipped:
            skipped += 1
        else:
            succeeded += 1
    return Summary(total=total, succeeded=succeeded, failed=failed, skipped=skipped)


def results_to_dict(batch: Batch, results: List[List[List[List[Outcome]]]]) -> Dict[str, Any]:
    """
    JSON-serializable report mirroring the batch document.
    `results` must come from running `batch`.
    """
    jobs = []
    for job, job_result in zip(batch.jobs, results):
        steps = []
        for step, step_result in zip(job.steps, job_result):
            runs = [
                {
                    "command": command.kind,
                    "outcomes": [o.to_dict() for o in outcomes],
                }
                for command, outcomes in zip(step.runs, step_result)
            ]
            steps.append({"name": step.name, "runs": runs})
        jobs.append({
            "name": job.name,
            "on-repositories": [r.full_name for r in job.on_repositories],
            "steps": steps,
        })

    summary = summarize(results)
    return {
        "version": batch.version,
        "name": batch.name,
        "jobs": jobs,
        "summary": {
            "total": summary.total,
            "succeeded": summary.succeeded,
            "failed": summary.failed,
            "skipped": summary.skipped,
        },
    }
