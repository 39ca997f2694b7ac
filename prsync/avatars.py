"""
Avatar enrichment for normalized accounts.

Enterprise avatars are fetched through the authenticated REST proxy and
inlined as data URIs; fetches run on a small shared pool and are memoized
per avatar path for the life of the resolver, as are user profile lookups
per login. A failed fetch is evicted from its cache so a later sync can
retry. For github.com accounts a gravatar URL can be derived from the
account email, looking the email up when it is unknown. Nothing in this
module raises: failures leave the avatar unset.
"""

import base64
import hashlib
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Sequence
from urllib.parse import parse_qsl, urlsplit

from prsync.adapters.base import GitPlatformAdapter, GitPlatformError
from prsync.config import AvatarConfig
from prsync.models import (
    Account,
    AssignEvent,
    CommentEvent,
    CommitEvent,
    HeadRefDeleteEvent,
    Issue,
    LabelEvent,
    MergedEvent,
    MilestoneEvent,
    PullRequest,
    ReviewEvent,
    Team,
    TimelineEvent,
)

LOG = logging.getLogger("prsync.avatars")

GRAVATAR_STYLE_NONE = "none"


class AvatarResolver:
    """Replaces ``avatar_url`` on accounts and teams.

    One instance is meant to live as long as the process; pass it to every
    sync cycle so the cache and the fetch pool are shared.
    """

    def __init__(
        self,
        adapter: GitPlatformAdapter,
        config: AvatarConfig | None = None,
        enterprise_uri: str | None = None,
    ) -> None:
        self._adapter = adapter
        self._config = config or AvatarConfig()
        self._enterprise_host = urlsplit(enterprise_uri).netloc if enterprise_uri else ""
        self._queue = ThreadPoolExecutor(max_workers=self._config.concurrency, thread_name_prefix="prsync-avatar")
        self._cache: Dict[str, Future] = {}
        self._profiles: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def close(self) -> None:
        self._queue.shutdown(wait=True)

    @property
    def cache_keys(self) -> List[str]:
        with self._lock:
            return list(self._cache)

    def gravatar_url(self, email: str) -> str | None:
        """Gravatar URL for ``email``, or None when gravatars are disabled."""
        style = self._config.gravatar_style
        if not email or style == GRAVATAR_STYLE_NONE:
            return None
        gravatar_id = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
        return f"https://www.gravatar.com/avatar/{gravatar_id}?s={self._config.gravatar_size}&d={style}"

    def _evict(self, cache: Dict[str, Future], key: str) -> None:
        with self._lock:
            cache.pop(key, None)

    def _fetch_data_uri(self, cache_key: str, path: str, params: Dict[str, str]) -> str | None:
        try:
            content_type, content = self._adapter.get_enterprise_avatar(path, params)
        except GitPlatformError as e:
            LOG.debug("Avatar fetch failed for %s: %s", path, e)
            self._evict(self._cache, cache_key)
            return None
        except Exception:
            self._evict(self._cache, cache_key)
            raise
        return f"data:{content_type};base64,{base64.b64encode(content).decode('ascii')}"

    def enterprise_avatar_url(self, avatar_url: str | None) -> str | None:
        """Data URI (or unchanged static URL) for an Enterprise avatar; None otherwise."""
        if not avatar_url or not self._enterprise_host:
            return None
        parts = urlsplit(avatar_url)
        # Static assets and inline data need no authenticated fetch
        if parts.scheme == "data" or parts.netloc == f"assets.{self._enterprise_host}":
            return avatar_url
        if parts.netloc != f"avatars.{self._enterprise_host}":
            return None

        cache_key = f"{parts.path}?{parts.query}"
        params = dict(parse_qsl(parts.query))
        with self._lock:
            future = self._cache.get(cache_key)
            if future is None:
                future = self._queue.submit(self._fetch_data_uri, cache_key, parts.path, params)
                self._cache[cache_key] = future
        return future.result()

    def _fetch_profile(self, login: str) -> Dict[str, Any] | None:
        try:
            return self._adapter.get_user(login)
        except GitPlatformError as e:
            LOG.debug("Email lookup failed for %s: %s", login, e)
            self._evict(self._profiles, login)
            return None
        except Exception:
            self._evict(self._profiles, login)
            raise

    def _backfill_email(self, account: Account) -> None:
        # One lookup per login, on the same bounded pool as avatar fetches
        with self._lock:
            future = self._profiles.get(account.login)
            if future is None:
                future = self._queue.submit(self._fetch_profile, account.login)
                self._profiles[account.login] = future
        profile = future.result()
        if profile is not None:
            account.email = profile.get("email") or None

    def replace_avatar_url(self, user: Account | Team) -> None:
        """Resolve and set ``user.avatar_url``; leaves it None when nothing resolves."""
        original = user.avatar_url
        user.avatar_url = None
        try:
            enterprise_url = self.enterprise_avatar_url(original)
            if enterprise_url:
                user.avatar_url = enterprise_url
                return
            if not isinstance(user, Account):
                return
            if user.email is None and user.login:
                self._backfill_email(user)
            if user.email:
                user.avatar_url = self.gravatar_url(user.email)
        except Exception as e:
            LOG.warning("Avatar resolution failed for %s: %s", _describe(user), e)

    def replace_all(self, users: Iterable[Account | Team]) -> None:
        """Resolve avatars for many accounts in parallel; returns when all are done."""
        users = list(users)
        if not users:
            return
        with ThreadPoolExecutor(max_workers=self._config.account_workers) as pool:
            list(pool.map(self.replace_avatar_url, users))

    def replace_account_avatar_urls(self, pr: PullRequest) -> None:
        """Author, assignees and suggested reviewers of a pull request."""
        users: List[Account | Team] = [pr.user]
        users.extend(pr.assignees or [])
        users.extend(pr.suggested_reviewers)
        self.replace_all(users)

    def replace_timeline_event_avatar_urls(self, events: Sequence[TimelineEvent]) -> None:
        self.replace_all(timeline_accounts(events))

    def replace_issues_avatar_urls(self, issues: Sequence[Issue]) -> None:
        users: List[Account | Team] = []
        for issue in issues:
            users.append(issue.user)
            users.extend(issue.assignees or [])
        self.replace_all(users)


def timeline_accounts(events: Sequence[TimelineEvent]) -> List[Account]:
    """Every account embedded in the given events, in event order."""
    accounts: List[Account] = []
    for event in events:
        if isinstance(event, (CommentEvent, ReviewEvent, MergedEvent)):
            accounts.append(event.user)
        elif isinstance(event, CommitEvent):
            accounts.append(event.author)
        elif isinstance(event, AssignEvent):
            accounts.extend([event.user, event.actor])
        elif isinstance(event, (HeadRefDeleteEvent, LabelEvent, MilestoneEvent)):
            accounts.append(event.actor)
    return accounts


def _describe(user: Account | Team) -> str:
    return user.display_label() or "<ghost>"
