from .commands import CreateGist, CreateIssue, CreateLabel, CreateTeam, Command, run_command
from .context import Context, new_context, with_job, with_step
from .errors import BatchError, BatchIOError, ParseError, RemoteError
from .model import Batch, Job, Repository, Step
from .parser import load_batch, parse_batch
from .report import ResultPath, Summary, iter_outcomes, results_to_dict, summarize
from .responses import (
    Gist,
    GistCreated,
    Issue,
    IssueCreated,
    Label,
    LabelCreated,
    Outcome,
    Skipped,
    Team,
    TeamCreated,
)
from .runner import Engine, run_batch, run_batch_from_bytes

__all__ = [
    "Batch", "Job", "Step", "Repository",
    "Command", "CreateLabel", "CreateIssue", "CreateTeam", "CreateGist", "run_command",
    "Context", "new_context", "with_job", "with_step",
    "BatchError", "BatchIOError", "ParseError", "RemoteError",
    "parse_batch", "load_batch",
    "Outcome", "Skipped", "Label", "Issue", "Team", "Gist",
    "LabelCreated", "IssueCreated", "TeamCreated", "GistCreated",
    "ResultPath", "Summary", "iter_outcomes", "summarize", "results_to_dict",
    "Engine", "run_batch", "run_batch_from_bytes",
]
