"""GitHub API adapter."""

import logging
from typing import Any, Dict, Tuple

import requests

from prsync.adapters.base import GitPlatformAdapter, GitPlatformError

LOG = logging.getLogger("prsync.adapters.github")

ENTERPRISE_AVATAR_REST_BASE = "/enterprise/avatars"


class GitHubAdapter(GitPlatformAdapter):
    """GitHub (or GitHub Enterprise) REST implementation."""

    def __init__(self, token: str | None, api_url: str = "https://api.github.com", timeout: int = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        if token:
            self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {path}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                msg = body.get("message") or msg
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def get_user(self, login: str) -> Dict[str, Any]:
        LOG.debug("Fetching user %s", login)
        return self._request("GET", f"/users/{login}").json()

    def get_enterprise_avatar(self, path: str, params: Dict[str, str]) -> Tuple[str, bytes]:
        resp = self._request("GET", f"{ENTERPRISE_AVATAR_REST_BASE}{path}", params=params or None)
        content_type = resp.headers.get("content-type", "application/octet-stream")
        return content_type, resp.content
