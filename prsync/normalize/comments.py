"""Comments, reactions and review threads from either API."""

import logging
from typing import Any, Dict, List

from prsync.diff_hunk import parse_comment_diff_hunk
from prsync.models import Comment, Reaction, ReviewThread
from prsync.normalize.authors import convert_rest_user, parse_author

LOG = logging.getLogger("prsync.normalize.comments")

REACTION_LABELS = {
    "THUMBS_UP": "\U0001f44d",
    "THUMBS_DOWN": "\U0001f44e",
    "LAUGH": "\U0001f604",
    "HOORAY": "\U0001f389",
    "CONFUSED": "\U0001f615",
    "HEART": "❤️",
    "ROCKET": "\U0001f680",
    "EYES": "\U0001f440",
}


def nodes_of(connection: Dict[str, Any] | None) -> List[Dict[str, Any]]:
    """Nodes of a GraphQL connection (empty when absent)."""
    return (connection or {}).get("nodes") or []


def _database_id(data: Dict[str, Any] | None) -> int | None:
    return (data or {}).get("databaseId")


def parse_graphql_reaction(reaction_groups: List[Dict[str, Any]] | None) -> List[Reaction]:
    """Reaction groups with at least one user; unknown contents are dropped."""
    reactions: List[Reaction] = []
    for group in reaction_groups or []:
        count = ((group.get("users") or {}).get("totalCount")) or 0
        if count <= 0:
            continue
        label = REACTION_LABELS.get(group.get("content", ""))
        if label is None:
            LOG.debug("Skip unknown reaction content %r", group.get("content"))
            continue
        reactions.append(
            Reaction(
                label=label,
                count=count,
                viewer_has_reacted=bool(group.get("viewerHasReacted")),
            )
        )
    return reactions


def parse_graphql_comment(data: Dict[str, Any], is_resolved: bool = False) -> Comment:
    """GraphQL PullRequestReviewComment to Comment.

    A comment is a draft iff its ``state`` is PENDING; ``is_resolved`` comes
    from the thread that owns the comment.
    """
    diff_hunk = data.get("diffHunk") or ""
    return Comment(
        id=data["databaseId"],
        graph_node_id=data.get("id") or "",
        url=data.get("url") or "",
        html_url=data.get("url") or "",
        body=data.get("body") or "",
        body_html=data.get("bodyHTML"),
        path=data.get("path"),
        diff_hunk=diff_hunk,
        diff_hunks=parse_comment_diff_hunk(diff_hunk),
        position=data.get("position"),
        original_position=data.get("originalPosition"),
        commit_id=(data.get("commit") or {}).get("oid"),
        original_commit_id=(data.get("originalCommit") or {}).get("oid"),
        pull_request_review_id=_database_id(data.get("pullRequestReview")),
        user=parse_author(data.get("author")),
        created_at=data.get("createdAt"),
        can_edit=bool(data.get("viewerCanUpdate", data.get("viewerCanDelete"))),
        can_delete=bool(data.get("viewerCanDelete")),
        is_draft=data.get("state") == "PENDING",
        in_reply_to_id=_database_id(data.get("replyTo")),
        reactions=parse_graphql_reaction(data.get("reactionGroups")),
        is_resolved=is_resolved,
    )


def parse_graphql_issue_comment(data: Dict[str, Any]) -> Comment:
    """GraphQL IssueComment to Comment (no diff hunk)."""
    return Comment(
        id=data["databaseId"],
        graph_node_id=data.get("id") or "",
        url=data.get("url") or "",
        html_url=data.get("url") or "",
        body=data.get("body") or "",
        body_html=data.get("bodyHTML"),
        user=parse_author(data.get("author")),
        created_at=data.get("createdAt"),
        can_edit=bool(data.get("viewerCanUpdate", data.get("viewerCanDelete"))),
        can_delete=bool(data.get("viewerCanDelete")),
        reactions=parse_graphql_reaction(data.get("reactionGroups")),
    )


def convert_rest_comment(data: Dict[str, Any]) -> Comment:
    """REST pull request review comment to Comment."""
    diff_hunk = data.get("diff_hunk") or ""
    return Comment(
        id=data["id"],
        graph_node_id=data.get("node_id") or "",
        url=data.get("url") or "",
        html_url=data.get("html_url") or "",
        body=data.get("body") or "",
        body_html=data.get("body_html"),
        path=data.get("path"),
        diff_hunk=diff_hunk,
        diff_hunks=parse_comment_diff_hunk(diff_hunk),
        position=data.get("position"),
        original_position=data.get("original_position"),
        commit_id=data.get("commit_id"),
        original_commit_id=data.get("original_commit_id"),
        pull_request_review_id=data.get("pull_request_review_id"),
        user=convert_rest_user(data.get("user")),
        created_at=data.get("created_at"),
        in_reply_to_id=data.get("in_reply_to_id"),
    )


def parse_graphql_review_thread(data: Dict[str, Any]) -> ReviewThread:
    """GraphQL PullRequestReviewThread to ReviewThread.

    Single-line threads have no start line; it falls back to the end line.
    """
    comments = data.get("comments") or {}
    edges = comments.get("edges") or []
    review_id = None
    if edges:
        review_id = _database_id((edges[0].get("node") or {}).get("pullRequestReview"))
    is_resolved = bool(data.get("isResolved"))
    line = data.get("line")
    original_line = data.get("originalLine")
    start_line = data.get("startLine")
    original_start_line = data.get("originalStartLine")
    nodes = nodes_of(comments) or [e["node"] for e in edges if e.get("node")]
    return ReviewThread(
        id=data["id"],
        pr_review_database_id=review_id,
        is_resolved=is_resolved,
        viewer_can_resolve=bool(data.get("viewerCanResolve")),
        viewer_can_unresolve=bool(data.get("viewerCanUnresolve")),
        path=data.get("path") or "",
        start_line=start_line if start_line is not None else line,
        end_line=line,
        original_start_line=original_start_line if original_start_line is not None else original_line,
        original_end_line=original_line,
        diff_side=data.get("diffSide") or "RIGHT",
        is_outdated=bool(data.get("isOutdated")),
        subject_type=data.get("subjectType") or "LINE",
        comments=[parse_graphql_comment(c, is_resolved) for c in nodes],
    )
