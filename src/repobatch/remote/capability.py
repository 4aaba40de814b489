# remote/capability.py
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from repobatch.responses import Gist, Issue, Label, Team


class RemoteCapability(Protocol):
    """
    Performs one remote operation per call.

    Implementations are shared by every concurrently running command, so they
    must be safe to call from several threads at once. Failures are raised
    (ideally as RemoteError); the engine turns them into result leaves.
    """

    def create_label(
        self, owner: str, repo: str, name: str, color: str, description: str
    ) -> Label: ...

    def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        milestone: Optional[int] = None,
        assignees: Sequence[str] = (),
        labels: Sequence[str] = (),
    ) -> Issue: ...

    def create_team(
        self,
        org: str,
        name: str,
        description: Optional[str] = None,
        maintainers: Sequence[str] = (),
        repo_names: Sequence[str] = (),
    ) -> Team: ...

    def create_gist(
        self,
        title: str,
        content: str,
        description: Optional[str] = None,
        public: bool = False,
    ) -> Gist: ...
