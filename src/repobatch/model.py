# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .commands import Command


@dataclass(frozen=True)
class Repository:
    """A target repository (owner + name). Value type, no identity."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class Step:
    """An ordered group of commands ("runs") inside a job."""
    name: Optional[str] = None
    runs: Tuple[Command, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Job:
    """
    A job: steps + the repositories its targeted commands operate on.

    YAML field `on-repositories` maps to `on_repositories`.
    """
    name: Optional[str] = None
    on_repositories: Tuple[Repository, ...] = field(default_factory=tuple)
    steps: Tuple[Step, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Batch:
    """Root of a batch document. Immutable once parsed."""
    version: str
    name: Optional[str] = None
    jobs: Tuple[Job, ...] = field(default_factory=tuple)

    @classmethod
    def from_bytes(cls, data: bytes | str) -> Batch:
        """Parse a YAML batch document. Raises ParseError."""
        from .parser import parse_batch

        return parse_batch(data)


def display_name(name: Optional[str]) -> str:
    return name if name else "UNNAMED"
