# commands.py
from __future__ import annotations

import contextlib
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, List, Optional, Tuple, Union

from .errors import RemoteError
from .parallel import fan_out
from .responses import (
    GistCreated,
    IssueCreated,
    LabelCreated,
    Outcome,
    Response,
    Skipped,
    TeamCreated,
)
from .ui.console import get_console

if TYPE_CHECKING:
    from .context import Context
    from .model import Repository
    from .remote.capability import RemoteCapability


# ---------------------------------------------------------------------
# Command variants (closed set, one per YAML key)
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class CreateLabel:
    """Create a label on every repository of the enclosing job."""
    name: str
    color: str
    description: str
    kind: ClassVar[str] = "create-label"


@dataclass(frozen=True)
class CreateIssue:
    """Open an issue on every repository of the enclosing job."""
    title: str
    body: str
    milestone: Optional[int] = None
    assignees: Tuple[str, ...] = field(default_factory=tuple)
    labels: Tuple[str, ...] = field(default_factory=tuple)
    kind: ClassVar[str] = "create-issue"


@dataclass(frozen=True)
class CreateTeam:
    """
    Create a team in organization `owner`, associated with the enclosing
    job's repositories. One call per command, not per repository.
    """
    name: str
    owner: str
    description: Optional[str] = None
    maintainers: Tuple[str, ...] = field(default_factory=tuple)
    kind: ClassVar[str] = "create-team"


@dataclass(frozen=True)
class CreateGist:
    """Create a gist with a single file. Not repository scoped."""
    title: str
    content: str
    description: Optional[str] = None
    public: bool = False
    kind: ClassVar[str] = "create-gist"


Command = Union[CreateLabel, CreateIssue, CreateTeam, CreateGist]

COMMAND_TYPES = {cls.kind: cls for cls in (CreateLabel, CreateIssue, CreateTeam, CreateGist)}

NO_JOB_REASON = "no enclosing job: {kind} needs the job's repositories"


# ---------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------

def _call(
    kind: str,
    fn: Callable[[], Response],
    target: Optional[Repository] = None,
    limiter: Optional[threading.Semaphore] = None,
) -> Outcome:
    """
    Perform one remote call; failures become an Outcome, never an exception.

    The call holds `limiter` (shared by the whole run) while it talks to
    the remote side.
    """
    try:
        with limiter if limiter is not None else contextlib.nullcontext():
            response = fn()
        return Outcome.success(response)
    except RemoteError as e:
        err = e
    except Exception as e:
        err = RemoteError(str(e) or type(e).__name__, details={"error_type": type(e).__name__})
        err.__cause__ = e

    err.details.setdefault("command", kind)
    if target is not None:
        err.details.setdefault("target", target.full_name)
    get_console().print_failure(kind, err.message, target.full_name if target else None)
    return Outcome.failure(err)


def _skipped(kind: str) -> List[Outcome]:
    reason = NO_JOB_REASON.format(kind=kind)
    get_console().print_skipped(kind, reason)
    return [Outcome.success(Skipped(reason=reason))]


def _per_target(
    kind: str,
    ctx: Context,
    fn: Callable[[Repository], Response],
    limiter: Optional[threading.Semaphore],
) -> List[Outcome]:
    if ctx.job is None:
        return _skipped(kind)
    return fan_out(
        lambda repo: _call(kind, lambda: fn(repo), target=repo, limiter=limiter),
        ctx.job.on_repositories,
    )


def run_command(
    command: Command,
    capability: RemoteCapability,
    ctx: Context,
    limiter: Optional[threading.Semaphore] = None,
) -> List[Outcome]:
    """
    Run one command under ctx and return its outcomes.

    - create-label / create-issue: one outcome per job repository (targets
      run concurrently, list order preserved)
    - create-team: one outcome, repo_names taken from the job
    - create-gist: one outcome, context independent
    - job-scoped commands without a job in ctx: one Skipped outcome, no call
    """
    if isinstance(command, CreateLabel):
        return _per_target(
            command.kind,
            ctx,
            lambda repo: LabelCreated(
                capability.create_label(
                    repo.owner, repo.name, command.name, command.color, command.description
                )
            ),
            limiter,
        )

    if isinstance(command, CreateIssue):
        return _per_target(
            command.kind,
            ctx,
            lambda repo: IssueCreated(
                capability.create_issue(
                    repo.owner,
                    repo.name,
                    command.title,
                    command.body,
                    milestone=command.milestone,
                    assignees=list(command.assignees),
                    labels=list(command.labels),
                )
            ),
            limiter,
        )

    if isinstance(command, CreateTeam):
        if ctx.job is None:
            return _skipped(command.kind)
        repo_names = [repo.full_name for repo in ctx.job.on_repositories]
        return [
            _call(
                command.kind,
                lambda: TeamCreated(
                    capability.create_team(
                        command.owner,
                        command.name,
                        description=command.description or "",
                        maintainers=list(command.maintainers),
                        repo_names=repo_names,
                    )
                ),
                limiter=limiter,
            )
        ]

    if isinstance(command, CreateGist):
        return [
            _call(
                command.kind,
                lambda: GistCreated(
                    capability.create_gist(
                        command.title,
                        command.content,
                        description=command.description or "",
                        public=command.public,
                    )
                ),
                limiter=limiter,
            )
        ]

    raise TypeError(f"Unknown command type: {type(command).__name__}")
