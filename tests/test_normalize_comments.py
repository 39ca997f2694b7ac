"""Tests for author, comment, reaction and review thread normalization."""

from prsync.models import Account
from prsync.normalize.authors import convert_rest_user, parse_author
from prsync.normalize.comments import (
    convert_rest_comment,
    parse_graphql_comment,
    parse_graphql_issue_comment,
    parse_graphql_reaction,
    parse_graphql_review_thread,
)

HUNK = "@@ -1,2 +1,3 @@\n line\n+new line\n line"


def _graphql_comment(**overrides):
    data = {
        "id": "PRRC_1",
        "databaseId": 101,
        "url": "https://github.com/o/r/pull/1#discussion_r101",
        "body": "Use a constant",
        "bodyHTML": "<p>Use a constant</p>",
        "path": "src/a.py",
        "viewerCanDelete": True,
        "viewerCanUpdate": True,
        "pullRequestReview": {"databaseId": 55},
        "diffHunk": HUNK,
        "position": 2,
        "originalPosition": 2,
        "commit": {"oid": "abc"},
        "originalCommit": {"oid": "def"},
        "author": {"login": "octocat", "url": "https://github.com/octocat", "avatarUrl": "https://a/1"},
        "createdAt": "2024-01-15T10:00:00Z",
        "state": "SUBMITTED",
        "replyTo": None,
        "reactionGroups": [],
    }
    data.update(overrides)
    return data


class TestAuthors:
    def test_missing_author_is_ghost(self) -> None:
        """A null author becomes an account with empty login and url."""
        for raw in (None, {}):
            author = parse_author(raw)
            assert isinstance(author, Account)
            assert author.login == ""
            assert author.url == ""
            assert author.is_ghost

    def test_author_fields_copied(self) -> None:
        author = parse_author(
            {"login": "octocat", "url": "https://github.com/octocat", "avatarUrl": "https://a/1", "email": "o@x.io"}
        )
        assert author.login == "octocat"
        assert author.url == "https://github.com/octocat"
        assert author.avatar_url == "https://a/1"
        assert author.email == "o@x.io"
        assert not author.is_ghost

    def test_rest_user_null_email_becomes_empty(self) -> None:
        """REST users use html_url and keep a null email as ''."""
        user = convert_rest_user(
            {"login": "octocat", "html_url": "https://github.com/octocat", "avatar_url": "https://a/1", "email": None}
        )
        assert user.url == "https://github.com/octocat"
        assert user.avatar_url == "https://a/1"
        assert user.email == ""

    def test_rest_user_missing_is_ghost(self) -> None:
        assert convert_rest_user(None).login == ""


class TestGraphQLComment:
    def test_fields_and_diff_hunks(self) -> None:
        """Comment fields are mapped and diff hunks parsed from the raw text."""
        comment = parse_graphql_comment(_graphql_comment(), is_resolved=True)
        assert comment.id == 101
        assert comment.graph_node_id == "PRRC_1"
        assert comment.commit_id == "abc"
        assert comment.original_commit_id == "def"
        assert comment.pull_request_review_id == 55
        assert comment.user.login == "octocat"
        assert comment.is_resolved is True
        assert comment.is_draft is False
        assert comment.in_reply_to_id is None
        assert len(comment.diff_hunks) == 1
        assert comment.diff_hunks[0].header == "@@ -1,2 +1,3 @@"

    def test_diff_hunks_ignore_upstream_value(self) -> None:
        """A ``diffHunks`` field in the payload is never trusted."""
        comment = parse_graphql_comment(_graphql_comment(diffHunks=[{"bogus": True}], diffHunk=""))
        assert comment.diff_hunks == []

    def test_pending_comment_is_draft(self) -> None:
        assert parse_graphql_comment(_graphql_comment(state="PENDING")).is_draft is True

    def test_reply_target(self) -> None:
        assert parse_graphql_comment(_graphql_comment(replyTo={"databaseId": 7})).in_reply_to_id == 7

    def test_missing_author_is_ghost(self) -> None:
        comment = parse_graphql_comment(_graphql_comment(author=None))
        assert comment.user.login == ""
        assert comment.user.url == ""

    def test_issue_comment(self) -> None:
        comment = parse_graphql_issue_comment(
            {
                "id": "IC_1",
                "databaseId": 9,
                "url": "https://github.com/o/r/issues/1#issuecomment-9",
                "body": "Looks good",
                "bodyHTML": "<p>Looks good</p>",
                "author": None,
                "viewerCanDelete": False,
                "createdAt": "2024-01-15T10:00:00Z",
            }
        )
        assert comment.id == 9
        assert comment.diff_hunk == ""
        assert comment.diff_hunks == []
        assert comment.user.login == ""


def test_rest_comment() -> None:
    """REST review comments use snake_case fields."""
    comment = convert_rest_comment(
        {
            "id": 200,
            "node_id": "PRRC_200",
            "html_url": "https://github.com/o/r/pull/1#discussion_r200",
            "body": "nit",
            "path": "README.md",
            "diff_hunk": HUNK,
            "position": 1,
            "original_position": 1,
            "commit_id": "abc",
            "original_commit_id": "abc",
            "user": {"login": "hubot", "html_url": "https://github.com/hubot"},
            "created_at": "2024-01-15T10:00:00Z",
            "in_reply_to_id": 101,
        }
    )
    assert comment.graph_node_id == "PRRC_200"
    assert comment.user.login == "hubot"
    assert comment.in_reply_to_id == 101
    assert len(comment.diff_hunks) == 1
    assert comment.is_draft is False


def test_reactions_skip_empty_and_unknown() -> None:
    """Only groups with users and known contents become reactions."""
    reactions = parse_graphql_reaction(
        [
            {"content": "THUMBS_UP", "users": {"totalCount": 2}, "viewerHasReacted": True},
            {"content": "HEART", "users": {"totalCount": 0}, "viewerHasReacted": False},
            {"content": "SPARKLES", "users": {"totalCount": 1}, "viewerHasReacted": False},
        ]
    )
    assert len(reactions) == 1
    assert reactions[0].label == "\U0001f44d"
    assert reactions[0].count == 2
    assert reactions[0].viewer_has_reacted is True
    assert parse_graphql_reaction(None) == []


class TestReviewThread:
    def _thread(self, **overrides):
        data = {
            "id": "PRRT_1",
            "isResolved": True,
            "viewerCanResolve": False,
            "viewerCanUnresolve": True,
            "path": "src/a.py",
            "line": 12,
            "startLine": None,
            "originalLine": 10,
            "originalStartLine": None,
            "diffSide": "RIGHT",
            "isOutdated": False,
            "subjectType": "LINE",
            "comments": {
                "nodes": [_graphql_comment(), _graphql_comment(databaseId=102, replyTo={"databaseId": 101})],
                "edges": [{"node": {"pullRequestReview": {"databaseId": 55}}}],
            },
        }
        data.update(overrides)
        return data

    def test_single_line_thread_start_falls_back_to_end(self) -> None:
        thread = parse_graphql_review_thread(self._thread())
        assert thread.start_line == 12
        assert thread.end_line == 12
        assert thread.original_start_line == 10
        assert thread.original_end_line == 10

    def test_multi_line_thread(self) -> None:
        thread = parse_graphql_review_thread(self._thread(startLine=8, originalStartLine=6))
        assert thread.start_line == 8
        assert thread.original_start_line == 6

    def test_comments_inherit_resolution(self) -> None:
        """Comments take is_resolved from the thread."""
        thread = parse_graphql_review_thread(self._thread())
        assert thread.pr_review_database_id == 55
        assert [c.id for c in thread.comments] == [101, 102]
        assert all(c.is_resolved for c in thread.comments)

        unresolved = parse_graphql_review_thread(self._thread(isResolved=False))
        assert not any(c.is_resolved for c in unresolved.comments)

    def test_thread_without_comments(self) -> None:
        thread = parse_graphql_review_thread(self._thread(comments={"nodes": [], "edges": []}))
        assert thread.pr_review_database_id is None
        assert thread.comments == []
