from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .remote.github import DEFAULT_API_URL, DEFAULT_TIMEOUT

TOKEN_ENV = "GITHUB_TOKEN"
API_URL_ENV = "REPOBATCH_API_URL"
MAX_WORKERS_ENV = "REPOBATCH_MAX_WORKERS"
TIMEOUT_ENV = "REPOBATCH_TIMEOUT"


def _int_env(env: Mapping[str, str], key: str) -> Optional[int]:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{key} must be >= 1, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    max_workers: Optional[int] = None
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if env is None else env
        timeout = _int_env(env, TIMEOUT_ENV)
        return cls(
            token=env.get(TOKEN_ENV) or None,
            api_url=env.get(API_URL_ENV) or DEFAULT_API_URL,
            max_workers=_int_env(env, MAX_WORKERS_ENV),
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        )
