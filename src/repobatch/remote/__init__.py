from .capability import RemoteCapability
from .github import GitHubClient, DEFAULT_API_URL, DEFAULT_TIMEOUT

__all__ = ["RemoteCapability", "GitHubClient", "DEFAULT_API_URL", "DEFAULT_TIMEOUT"]
