"""Abstract base for the Git platform calls used during enrichment."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Abstract interface for the account lookups the avatar resolver needs."""

    @abstractmethod
    def get_user(self, login: str) -> Dict[str, Any]:
        """Fetch a user's public profile (REST shape)."""
        ...

    @abstractmethod
    def get_enterprise_avatar(self, path: str, params: Dict[str, str]) -> Tuple[str, bytes]:
        """Fetch an avatar image through the Enterprise proxy; returns (content type, bytes)."""
        ...
