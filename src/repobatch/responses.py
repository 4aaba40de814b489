"""
Remote payloads and per-leaf results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .errors import RemoteError


# ---------------------------------------------------------------------
# Payloads returned by the remote capability
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Label:
    """A repository label."""

    name: str
    color: str
    description: Optional[str] = None
    id: Optional[int] = None
    url: Optional[str] = None
    default: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "description": self.description,
            "url": self.url,
            "default": self.default,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Label":
        """Deserialize from a GitHub API label object."""
        return cls(
            name=data["name"],
            color=data.get("color", ""),
            description=data.get("description"),
            id=data.get("id"),
            url=data.get("url"),
            default=bool(data.get("default", False)),
        )


@dataclass(frozen=True)
class Issue:
    """An issue opened on a repository."""

    number: int
    title: str
    id: Optional[int] = None
    state: Optional[str] = None
    body: Optional[str] = None
    html_url: Optional[str] = None
    labels: Tuple[str, ...] = field(default_factory=tuple)
    assignees: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "number": self.number,
            "title": self.title,
            "state": self.state,
            "body": self.body,
            "html_url": self.html_url,
            "labels": list(self.labels),
            "assignees": list(self.assignees),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Issue":
        """Deserialize from a GitHub API issue object."""
        # labels/assignees come back as objects; keep their names only
        labels = tuple(
            lb["name"] if isinstance(lb, dict) else str(lb)
            for lb in data.get("labels") or []
        )
        assignees = tuple(
            a["login"] if isinstance(a, dict) else str(a)
            for a in data.get("assignees") or []
        )
        return cls(
            number=data["number"],
            title=data["title"],
            id=data.get("id"),
            state=data.get("state"),
            body=data.get("body"),
            html_url=data.get("html_url"),
            labels=labels,
            assignees=assignees,
        )


@dataclass(frozen=True)
class Team:
    """An organization team."""

    name: str
    slug: str
    id: Optional[int] = None
    description: Optional[str] = None
    privacy: Optional[str] = None
    html_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "privacy": self.privacy,
            "html_url": self.html_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize from a GitHub API team object."""
        return cls(
            name=data["name"],
            slug=data.get("slug", ""),
            id=data.get("id"),
            description=data.get("description"),
            privacy=data.get("privacy"),
            html_url=data.get("html_url"),
        )


@dataclass(frozen=True)
class Gist:
    """A gist."""

    id: str
    files: Tuple[str, ...] = field(default_factory=tuple)
    description: Optional[str] = None
    public: bool = False
    html_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "files": list(self.files),
            "description": self.description,
            "public": self.public,
            "html_url": self.html_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Gist":
        """Deserialize from a GitHub API gist object."""
        return cls(
            id=str(data["id"]),
            files=tuple(sorted((data.get("files") or {}).keys())),
            description=data.get("description"),
            public=bool(data.get("public", False)),
            html_url=data.get("html_url"),
        )


# ---------------------------------------------------------------------
# Responses: one variant per command kind, plus Skipped
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class LabelCreated:
    label: Label
    kind = "label-created"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "label": self.label.to_dict()}


@dataclass(frozen=True)
class IssueCreated:
    issue: Issue
    kind = "issue-created"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "issue": self.issue.to_dict()}


@dataclass(frozen=True)
class TeamCreated:
    team: Team
    kind = "team-created"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "team": self.team.to_dict()}


@dataclass(frozen=True)
class GistCreated:
    gist: Gist
    kind = "gist-created"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "gist": self.gist.to_dict()}


@dataclass(frozen=True)
class Skipped:
    """No-op: the command's preconditions were not met, nothing was called."""
    reason: str
    kind = "skipped"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "reason": self.reason}


Response = Union[LabelCreated, IssueCreated, TeamCreated, GistCreated, Skipped]


@dataclass(frozen=True)
class Outcome:
    """
    One leaf of the result tree: either a response or a remote error.

    Exactly one of `response` / `error` is set.
    """
    response: Optional[Response] = None
    error: Optional[RemoteError] = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("Outcome needs exactly one of response or error")

    @classmethod
    def success(cls, response: Response) -> Outcome:
        return cls(response=response)

    @classmethod
    def failure(cls, error: RemoteError) -> Outcome:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def skipped(self) -> bool:
        return isinstance(self.response, Skipped)

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {
                "status": "failed",
                "error": {
                    "kind": self.error.kind,
                    "message": self.error.message,
                    "details": {k: str(v) for k, v in self.error.details.items()},
                },
            }
        status = "skipped" if self.skipped else "ok"
        return {"status": status, "response": self.response.to_dict()}
