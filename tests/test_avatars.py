"""Tests for avatar enrichment (AvatarResolver)."""

import hashlib
import threading
import time
from unittest.mock import Mock

import pytest

from payloads import commit, review
from prsync.adapters.base import GitPlatformError
from prsync.avatars import AvatarResolver, timeline_accounts
from prsync.config import AvatarConfig
from prsync.models import Account, Team
from prsync.normalize.events import parse_graphql_timeline_events

ENTERPRISE = "https://ghe.example.com"


@pytest.fixture
def adapter() -> Mock:
    adapter = Mock()
    adapter.get_enterprise_avatar.return_value = ("image/png", b"png-bytes")
    adapter.get_user.return_value = {"email": "Mona@Example.com "}
    return adapter


def _resolver(adapter: Mock, style: str = "identicon", enterprise: str | None = ENTERPRISE) -> AvatarResolver:
    return AvatarResolver(adapter, AvatarConfig(gravatar_style=style), enterprise_uri=enterprise)


class TestEnterpriseAvatars:
    def test_avatar_becomes_data_uri(self, adapter: Mock) -> None:
        """avatars.<host> URLs are fetched and inlined."""
        resolver = _resolver(adapter)
        user = Account(login="mona", url="", avatar_url="https://avatars.ghe.example.com/u/1?s=40&v=4")
        resolver.replace_avatar_url(user)
        assert user.avatar_url == "data:image/png;base64,cG5nLWJ5dGVz"
        adapter.get_enterprise_avatar.assert_called_once_with("/u/1", {"s": "40", "v": "4"})

    def test_fetch_is_memoized(self, adapter: Mock) -> None:
        """The same avatar path is fetched once for many accounts."""
        resolver = _resolver(adapter)
        users = [Account(login=f"u{i}", url="", avatar_url="https://avatars.ghe.example.com/u/1?s=40") for i in range(5)]
        resolver.replace_all(users)
        assert adapter.get_enterprise_avatar.call_count == 1
        assert all(u.avatar_url.startswith("data:image/png;base64,") for u in users)
        assert resolver.cache_keys == ["/u/1?s=40"]

    def test_failed_fetch_is_evicted(self, adapter: Mock) -> None:
        """A failed fetch leaves the avatar unset and can be retried later."""
        adapter.get_enterprise_avatar.side_effect = GitPlatformError("500: boom")
        adapter.get_user.return_value = {"email": None}
        resolver = _resolver(adapter)
        user = Account(login="mona", url="", avatar_url="https://avatars.ghe.example.com/u/1")
        resolver.replace_avatar_url(user)
        assert user.avatar_url is None
        assert resolver.cache_keys == []

        adapter.get_enterprise_avatar.side_effect = None
        user.avatar_url = "https://avatars.ghe.example.com/u/1"
        resolver.replace_avatar_url(user)
        assert user.avatar_url.startswith("data:")
        assert adapter.get_enterprise_avatar.call_count == 2

    def test_unexpected_fetch_error_is_evicted(self, adapter: Mock) -> None:
        """Errors other than GitPlatformError also drop the cache entry."""
        adapter.get_enterprise_avatar.side_effect = RuntimeError("connection reset")
        adapter.get_user.return_value = {"email": None}
        resolver = _resolver(adapter)
        user = Account(login="mona", url="", avatar_url="https://avatars.ghe.example.com/u/1")
        resolver.replace_avatar_url(user)
        assert user.avatar_url is None
        assert resolver.cache_keys == []

        adapter.get_enterprise_avatar.side_effect = None
        user.avatar_url = "https://avatars.ghe.example.com/u/1"
        resolver.replace_avatar_url(user)
        assert user.avatar_url == "data:image/png;base64,cG5nLWJ5dGVz"
        assert adapter.get_enterprise_avatar.call_count == 2

    def test_static_assets_pass_through(self, adapter: Mock) -> None:
        resolver = _resolver(adapter)
        for url in ("https://assets.ghe.example.com/a.png", "data:image/png;base64,AAAA"):
            team = Team(name="core", avatar_url=url)
            resolver.replace_avatar_url(team)
            assert team.avatar_url == url
        adapter.get_enterprise_avatar.assert_not_called()

    def test_concurrency_is_bounded(self, adapter: Mock) -> None:
        """No more than ``concurrency`` fetches are in flight at once."""
        lock = threading.Lock()
        state = {"active": 0, "peak": 0}

        def slow_fetch(path, params):
            with lock:
                state["active"] += 1
                state["peak"] = max(state["peak"], state["active"])
            time.sleep(0.02)
            with lock:
                state["active"] -= 1
            return "image/png", b"x"

        adapter.get_enterprise_avatar.side_effect = slow_fetch
        resolver = AvatarResolver(adapter, AvatarConfig(concurrency=3, account_workers=10), enterprise_uri=ENTERPRISE)
        users = [Account(login=f"u{i}", url="", avatar_url=f"https://avatars.ghe.example.com/u/{i}") for i in range(10)]
        resolver.replace_all(users)
        assert adapter.get_enterprise_avatar.call_count == 10
        assert state["peak"] <= 3


class TestGravatar:
    def test_email_lookup_and_gravatar(self, adapter: Mock) -> None:
        """Unknown emails are looked up, then hashed into a gravatar URL."""
        resolver = _resolver(adapter, enterprise=None)
        user = Account(login="mona", url="", avatar_url="https://avatars.githubusercontent.com/u/1")
        resolver.replace_avatar_url(user)
        digest = hashlib.md5(b"mona@example.com").hexdigest()
        assert user.email == "Mona@Example.com "
        assert user.avatar_url == f"https://www.gravatar.com/avatar/{digest}?s=200&d=identicon"
        adapter.get_user.assert_called_once_with("mona")

    def test_email_lookup_is_memoized_per_login(self, adapter: Mock) -> None:
        """Many accounts with the same login share one profile lookup."""
        resolver = AvatarResolver(
            adapter, AvatarConfig(gravatar_style="identicon", account_workers=8), enterprise_uri=None
        )
        users = [Account(login="mona", url="") for _ in range(6)] + [Account(login="hubot", url="")]
        resolver.replace_all(users)
        assert sorted(c.args[0] for c in adapter.get_user.call_args_list) == ["hubot", "mona"]
        assert all(u.email == "Mona@Example.com " for u in users)

    def test_failed_email_lookup_is_retried(self, adapter: Mock) -> None:
        adapter.get_user.side_effect = [GitPlatformError("502: Bad Gateway"), {"email": "mona@example.com"}]
        resolver = _resolver(adapter, enterprise=None)
        first = Account(login="mona", url="")
        resolver.replace_avatar_url(first)
        assert first.email is None

        second = Account(login="mona", url="")
        resolver.replace_avatar_url(second)
        assert second.email == "mona@example.com"
        assert adapter.get_user.call_count == 2

    def test_known_empty_email_is_not_looked_up(self, adapter: Mock) -> None:
        resolver = _resolver(adapter, enterprise=None)
        user = Account(login="mona", url="", email="", avatar_url="https://x/1")
        resolver.replace_avatar_url(user)
        adapter.get_user.assert_not_called()
        assert user.avatar_url is None

    def test_gravatar_disabled(self, adapter: Mock) -> None:
        resolver = _resolver(adapter, style="none", enterprise=None)
        user = Account(login="mona", url="", email="mona@example.com")
        resolver.replace_avatar_url(user)
        assert user.avatar_url is None

    def test_lookup_failure_is_swallowed(self, adapter: Mock) -> None:
        adapter.get_user.side_effect = GitPlatformError("404: Not Found")
        resolver = _resolver(adapter, enterprise=None)
        user = Account(login="ghost-user", url="")
        resolver.replace_avatar_url(user)
        assert user.avatar_url is None
        assert user.email is None

    def test_unexpected_error_is_swallowed(self, adapter: Mock) -> None:
        adapter.get_user.side_effect = RuntimeError("unexpected")
        resolver = _resolver(adapter, enterprise=None)
        user = Account(login="mona", url="")
        resolver.replace_avatar_url(user)
        assert user.avatar_url is None

    def test_ghost_account_is_not_looked_up(self, adapter: Mock) -> None:
        resolver = _resolver(adapter, enterprise=None)
        user = Account(login="", url="")
        resolver.replace_avatar_url(user)
        adapter.get_user.assert_not_called()

    def test_teams_get_no_gravatar(self, adapter: Mock) -> None:
        resolver = _resolver(adapter, enterprise=None)
        team = Team(name="core", avatar_url="https://avatars.githubusercontent.com/t/1")
        resolver.replace_avatar_url(team)
        assert team.avatar_url is None
        adapter.get_user.assert_not_called()


def test_timeline_accounts_and_replacement(adapter: Mock) -> None:
    events = parse_graphql_timeline_events([commit("aaa", "octocat"), review(1, "hubot", "APPROVED")])
    accounts = timeline_accounts(events)
    assert [a.login for a in accounts] == ["octocat", "hubot"]

    _resolver(adapter, enterprise=None).replace_timeline_event_avatar_urls(events)
    assert events[0].author.avatar_url.startswith("https://www.gravatar.com/avatar/")
    assert events[1].user.avatar_url.startswith("https://www.gravatar.com/avatar/")
