from __future__ import annotations

import random
import sys
import threading
import time
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from repobatch.errors import RemoteError  # noqa: E402
from repobatch.responses import Gist, Issue, Label, Team  # noqa: E402
from repobatch.ui.console import Console, set_console  # noqa: E402


class FakeCapability:
    """
    In-memory remote capability.

    - records every call as (method, args...)
    - `latency`: max random sleep per call, to shuffle completion order
    - `fail`: predicate(method, kwargs) -> bool, raise RemoteError when true
    """

    def __init__(self, latency: float = 0.0, fail=None, seed: int | None = None):
        self.latency = latency
        self.fail = fail
        self.calls = []
        self._lock = threading.Lock()
        self._random = random.Random(seed)

    def _record(self, method: str, **kwargs) -> None:
        with self._lock:
            self.calls.append((method, kwargs))
            delay = self._random.uniform(0, self.latency) if self.latency else 0.0
        if delay:
            time.sleep(delay)
        if self.fail is not None and self.fail(method, kwargs):
            raise RemoteError("API request failed: 422 Validation Failed", status=422)

    def create_label(self, owner, repo, name, color, description):
        self._record("create_label", owner=owner, repo=repo, name=name, color=color, description=description)
        return Label(
            name=name,
            color=color,
            description=description,
            url=f"https://api.github.com/repos/{owner}/{repo}/labels/{name}",
        )

    def create_issue(self, owner, repo, title, body, milestone=None, assignees=(), labels=()):
        self._record(
            "create_issue",
            owner=owner,
            repo=repo,
            title=title,
            body=body,
            milestone=milestone,
            assignees=list(assignees),
            labels=list(labels),
        )
        return Issue(
            number=1,
            title=title,
            body=body,
            html_url=f"https://github.com/{owner}/{repo}/issues/1",
            labels=tuple(labels),
            assignees=tuple(assignees),
        )

    def create_team(self, org, name, description=None, maintainers=(), repo_names=()):
        self._record(
            "create_team",
            org=org,
            name=name,
            description=description,
            maintainers=list(maintainers),
            repo_names=list(repo_names),
        )
        return Team(name=name, slug=name.lower().replace(" ", "-"), description=description)

    def create_gist(self, title, content, description=None, public=False):
        self._record("create_gist", title=title, content=content, description=description, public=public)
        return Gist(id="aa5a315d61ae9438b18d", files=(title,), description=description, public=public)

    def methods(self):
        return [m for m, _ in self.calls]


@pytest.fixture
def capability() -> FakeCapability:
    return FakeCapability()


@pytest.fixture(autouse=True)
def _quiet_console():
    set_console(Console(quiet=True))
    yield
    set_console(Console(quiet=True))


LABEL_BATCH = """
version: "1.0"
name: Test
jobs:
  - name: "Perform some basics things for some repos"
    on-repositories:
      - owner: me
        name: repo1
    steps:
      - name: Hello world!
        runs:
          - create-label:
              name: "bug"
              color: "f29513"
              description: "Something isn't working"
"""
