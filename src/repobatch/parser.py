# parser.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .commands import COMMAND_TYPES, Command, CreateGist, CreateIssue, CreateLabel, CreateTeam
from .errors import BatchIOError, ParseError
from .model import Batch, Job, Repository, Step


# ---------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------

def _mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"expected a mapping, got {type(value).__name__}", location=where)
    return value


def _sequence(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"expected a sequence, got {type(value).__name__}", location=where)
    return value


def _check_keys(data: Dict[str, Any], allowed: Tuple[str, ...], where: str) -> None:
    unknown = sorted(str(k) for k in data if k not in allowed)
    if unknown:
        raise ParseError(
            f"unknown field(s) {unknown}, expected one of {list(allowed)}",
            location=where,
        )


def _str(data: Dict[str, Any], key: str, where: str, required: bool = True) -> Optional[str]:
    value = data.get(key)
    if value is None:
        if required:
            raise ParseError(f"missing required field '{key}'", location=where)
        return None
    if not isinstance(value, str):
        raise ParseError(
            f"field '{key}' must be a string, got {type(value).__name__}",
            location=where,
        )
    return value


def _str_list(data: Dict[str, Any], key: str, where: str) -> Tuple[str, ...]:
    items = _sequence(data.get(key), f"{where}.{key}")
    for i, item in enumerate(items):
        if not isinstance(item, str):
            raise ParseError("expected a string", location=f"{where}.{key}[{i}]")
    return tuple(items)


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def _parse_command(value: Any, where: str) -> Command:
    data = _mapping(value, where)
    if len(data) != 1:
        raise ParseError(
            f"a command must have exactly one key, got {sorted(map(str, data))}",
            location=where,
        )
    kind, params = next(iter(data.items()))
    if kind not in COMMAND_TYPES:
        raise ParseError(
            f"unknown command '{kind}', expected one of {sorted(COMMAND_TYPES)}",
            location=where,
        )
    where = f"{where}.{kind}"
    params = _mapping(params, where)

    if kind == CreateLabel.kind:
        _check_keys(params, ("name", "color", "description"), where)
        return CreateLabel(
            name=_str(params, "name", where),
            color=_str(params, "color", where),
            description=_str(params, "description", where),
        )

    if kind == CreateIssue.kind:
        _check_keys(params, ("title", "body", "milestone", "assignees", "labels"), where)
        milestone = params.get("milestone")
        # bool is an int subclass; reject `milestone: true`
        if milestone is not None and (isinstance(milestone, bool) or not isinstance(milestone, int)):
            raise ParseError("field 'milestone' must be an integer", location=where)
        return CreateIssue(
            title=_str(params, "title", where),
            body=_str(params, "body", where),
            milestone=milestone,
            assignees=_str_list(params, "assignees", where),
            labels=_str_list(params, "labels", where),
        )

    if kind == CreateTeam.kind:
        _check_keys(params, ("name", "owner", "description", "maintainers"), where)
        return CreateTeam(
            name=_str(params, "name", where),
            owner=_str(params, "owner", where),
            description=_str(params, "description", where, required=False),
            maintainers=_str_list(params, "maintainers", where),
        )

    _check_keys(params, ("title", "content", "description", "public"), where)
    public = params.get("public", False)
    if public is None:
        public = False
    if not isinstance(public, bool):
        raise ParseError("field 'public' must be a boolean", location=where)
    return CreateGist(
        title=_str(params, "title", where),
        content=_str(params, "content", where),
        description=_str(params, "description", where, required=False),
        public=public,
    )


# ---------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------

def _parse_repository(value: Any, where: str) -> Repository:
    data = _mapping(value, where)
    _check_keys(data, ("owner", "name"), where)
    return Repository(owner=_str(data, "owner", where), name=_str(data, "name", where))


def _parse_step(value: Any, where: str) -> Step:
    data = _mapping(value, where)
    _check_keys(data, ("name", "runs"), where)
    runs = _sequence(data.get("runs"), f"{where}.runs")
    return Step(
        name=_str(data, "name", where, required=False),
        runs=tuple(_parse_command(c, f"{where}.runs[{i}]") for i, c in enumerate(runs)),
    )


def _parse_job(value: Any, where: str) -> Job:
    data = _mapping(value, where)
    _check_keys(data, ("name", "on-repositories", "steps"), where)
    repos = _sequence(data.get("on-repositories"), f"{where}.on-repositories")
    steps = _sequence(data.get("steps"), f"{where}.steps")
    return Job(
        name=_str(data, "name", where, required=False),
        on_repositories=tuple(
            _parse_repository(r, f"{where}.on-repositories[{i}]") for i, r in enumerate(repos)
        ),
        steps=tuple(_parse_step(s, f"{where}.steps[{i}]") for i, s in enumerate(steps)),
    )


def parse_batch(data: bytes | str) -> Batch:
    """
    Parse a YAML batch document into a Batch.

    Raises:
        ParseError: invalid YAML, or a document that does not match the
            batch schema (the error names the offending location)
    """
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid YAML: {e}") from e

    root = _mapping(document, "<root>")
    _check_keys(root, ("version", "name", "jobs"), "<root>")
    if "jobs" not in root:
        raise ParseError("missing required field 'jobs'", location="<root>")
    jobs = _sequence(root["jobs"], "jobs")

    return Batch(
        version=_str(root, "version", "<root>"),
        name=_str(root, "name", "<root>", required=False),
        jobs=tuple(_parse_job(j, f"jobs[{i}]") for i, j in enumerate(jobs)),
    )


def read_file(path: str | Path) -> bytes:
    """Read a batch file. Raises BatchIOError."""
    p = Path(path).expanduser()
    try:
        return p.read_bytes()
    except OSError as e:
        raise BatchIOError(f"could not read batch file: {e.strerror or e}", path=str(p)) from e


def load_batch(path: str | Path) -> Batch:
    """Read and parse a batch file."""
    return parse_batch(read_file(path))
