# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class BatchError(Exception):
    """
    Structured batch error with enough context for:
      - clean CLI output
      - JSON reports
      - debugging without full tracebacks

    The original exception, when any, is kept as __cause__.
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class ParseError(BatchError):
    """The batch document is not valid YAML or does not match the schema."""

    def __init__(self, message: str, *, location: str | None = None):
        details = {"location": location} if location else {}
        super().__init__(kind="parse", message=message, details=details)


class BatchIOError(BatchError):
    """The batch document could not be read."""

    def __init__(self, message: str, *, path: str):
        super().__init__(kind="io", message=message, details={"path": path})


class RemoteError(BatchError):
    """A single remote call failed (auth, rate limit, validation, network...)."""

    def __init__(self, message: str, *, status: int | None = None, details: dict | None = None):
        super().__init__(kind="remote", message=message, details=dict(details or {}))
        self.status = status
        if status is not None:
            self.details.setdefault("status", status)
