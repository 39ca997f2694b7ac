"""Assemble Issue and PullRequest records from REST or GraphQL payloads."""

from typing import Any, Dict, List

from prsync.models import (
    AbbreviatedComment,
    Account,
    CommitContribution,
    Issue,
    Label,
    MergeMethod,
    Milestone,
    PullRequest,
    PullRequestMergeability,
    SuggestedReviewer,
    User,
    ViewerPermission,
)
from prsync.normalize.authors import convert_rest_user, parse_author
from prsync.normalize.comments import nodes_of
from prsync.normalize.refs import convert_rest_ref, parse_graphql_ref

_MERGEABILITY = {
    "UNKNOWN": PullRequestMergeability.UNKNOWN,
    "MERGEABLE": PullRequestMergeability.MERGEABLE,
    "CONFLICTING": PullRequestMergeability.CONFLICT,
}

_MERGE_METHODS = {
    "MERGE": MergeMethod.MERGE,
    "SQUASH": MergeMethod.SQUASH,
    "REBASE": MergeMethod.REBASE,
}


def parse_mergeability(mergeability: str | None, merge_state_status: str | None) -> PullRequestMergeability:
    """Combine ``mergeable`` and ``mergeStateStatus``.

    BLOCKED and BEHIND override the base value unless it is a conflict.
    """
    parsed = _MERGEABILITY.get(mergeability or "", PullRequestMergeability.UNKNOWN)
    if parsed != PullRequestMergeability.CONFLICT:
        if merge_state_status == "BLOCKED":
            parsed = PullRequestMergeability.NOT_MERGEABLE
        elif merge_state_status == "BEHIND":
            parsed = PullRequestMergeability.BEHIND
    return parsed


def parse_merge_method(merge_method: str | None) -> MergeMethod | None:
    return _MERGE_METHODS.get(merge_method or "")


def parse_viewer_permission(data: Dict[str, Any] | None) -> ViewerPermission:
    """``repository.viewerPermission`` to ViewerPermission (UNKNOWN when missing or unrecognized)."""
    permission = ((data or {}).get("repository") or {}).get("viewerPermission")
    try:
        return ViewerPermission(permission)
    except ValueError:
        return ViewerPermission.UNKNOWN


def parse_milestone(data: Dict[str, Any] | None) -> Milestone | None:
    if not data:
        return None
    return Milestone(
        title=data.get("title") or "",
        id=data.get("id") or "",
        due_on=data.get("dueOn"),
        created_at=data.get("createdAt"),
    )


def _rest_labels(labels: List[Any] | None) -> List[Label]:
    """REST labels may be plain names or label objects."""
    parsed: List[Label] = []
    for label in labels or []:
        if isinstance(label, str):
            parsed.append(Label(name=label))
        elif isinstance(label, dict):
            parsed.append(Label(name=label.get("name") or "", color=label.get("color") or ""))
    return parsed


def _graphql_labels(connection: Dict[str, Any] | None) -> List[Label]:
    return [Label(name=lb.get("name") or "", color=lb.get("color") or "") for lb in nodes_of(connection)]


def parse_suggested_reviewers(data: List[Dict[str, Any]] | None) -> List[SuggestedReviewer]:
    """Suggested reviewers sorted case-insensitively by login."""
    reviewers = []
    for suggestion in data or []:
        account = parse_author(suggestion.get("reviewer"))
        reviewers.append(
            SuggestedReviewer(
                **account.model_dump(exclude={"kind"}),
                is_author=bool(suggestion.get("isAuthor")),
                is_commenter=bool(suggestion.get("isCommenter")),
            )
        )
    return sorted(reviewers, key=lambda r: r.login.casefold())


def _abbreviated_comments(connection: Dict[str, Any] | None) -> List[AbbreviatedComment] | None:
    if connection is None:
        return None
    return [
        AbbreviatedComment(
            author=parse_author(c.get("author")),
            body=c.get("body") or "",
            database_id=c["databaseId"],
        )
        for c in nodes_of(connection)
    ]


def _graphql_assignees(connection: Dict[str, Any] | None) -> List[Account] | None:
    if connection is None:
        return None
    return [parse_author(a) for a in nodes_of(connection)]


def convert_rest_pull_request(data: Dict[str, Any]) -> PullRequest:
    """REST pull request (detail or list item) to PullRequest.

    List responses omit ``mergeable``; the field is then left unset.
    """
    assignees = data.get("assignees")
    pr = PullRequest(
        id=data["id"],
        graph_node_id=data.get("node_id") or "",
        number=data["number"],
        body=data.get("body") or "",
        title=data.get("title") or "",
        title_html=data.get("title"),
        url=data.get("html_url") or "",
        user=convert_rest_user(data.get("user")),
        state=data.get("state", "open"),
        merged=bool(data.get("merged")),
        assignees=[convert_rest_user(a) for a in assignees] if assignees is not None else None,
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        head=convert_rest_ref(data.get("head")),
        base=convert_rest_ref(data.get("base")),
        labels=_rest_labels(data.get("labels")),
        is_draft=bool(data.get("draft")),
    )
    if "mergeable" in data:
        pr.mergeable = (
            PullRequestMergeability.MERGEABLE if data["mergeable"] else PullRequestMergeability.NOT_MERGEABLE
        )
    return pr


def convert_rest_issue(data: Dict[str, Any]) -> Issue:
    """REST issue to Issue."""
    assignees = data.get("assignees")
    return Issue(
        id=data["id"],
        graph_node_id=data.get("node_id") or "",
        number=data["number"],
        body=data.get("body") or "",
        title=data.get("title") or "",
        title_html=data.get("title"),
        url=data.get("html_url") or "",
        user=convert_rest_user(data.get("user")),
        state=data.get("state", "open"),
        assignees=[convert_rest_user(a) for a in assignees] if assignees is not None else None,
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        labels=_rest_labels(data.get("labels")),
    )


def parse_graphql_pull_request(data: Dict[str, Any]) -> PullRequest:
    """GraphQL PullRequest node to PullRequest."""
    head_ref = data.get("headRef")
    base_ref = data.get("baseRef")
    auto_merge = data.get("autoMergeRequest")
    return PullRequest(
        id=data["databaseId"],
        graph_node_id=data.get("id") or "",
        url=data.get("url") or "",
        number=data["number"],
        state=data.get("state") or "",
        body=data.get("body") or "",
        body_html=data.get("bodyHTML"),
        title=data.get("title") or "",
        title_html=data.get("titleHTML"),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
        is_remote_head_deleted=not head_ref,
        head=parse_graphql_ref(
            (head_ref or {}).get("name") or data.get("headRefName"),
            data.get("headRefOid"),
            data.get("headRepository"),
        ),
        is_remote_base_deleted=not base_ref,
        base=parse_graphql_ref(
            (base_ref or {}).get("name") or data.get("baseRefName"),
            data.get("baseRefOid"),
            data.get("baseRepository"),
        ),
        user=parse_author(data.get("author")),
        merged=bool(data.get("merged")),
        mergeable=parse_mergeability(data.get("mergeable"), data.get("mergeStateStatus")),
        auto_merge=bool(auto_merge),
        auto_merge_method=parse_merge_method((auto_merge or {}).get("mergeMethod")),
        allow_auto_merge=bool(data.get("viewerCanEnableAutoMerge") or data.get("viewerCanDisableAutoMerge")),
        labels=_graphql_labels(data.get("labels")),
        is_draft=bool(data.get("isDraft")),
        suggested_reviewers=parse_suggested_reviewers(data.get("suggestedReviewers")),
        comments=_abbreviated_comments(data.get("comments")),
        milestone=parse_milestone(data.get("milestone")),
        assignees=_graphql_assignees(data.get("assignees")),
    )


def parse_graphql_issue(data: Dict[str, Any]) -> Issue:
    """GraphQL Issue node to Issue, keeping the owning repository."""
    repository = data.get("repository") or {}
    return Issue(
        id=data["databaseId"],
        graph_node_id=data.get("id") or "",
        url=data.get("url") or "",
        number=data["number"],
        state=data.get("state") or "",
        body=data.get("body") or "",
        body_html=data.get("bodyHTML"),
        title=data.get("title") or "",
        title_html=data.get("titleHTML"),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
        assignees=_graphql_assignees(data.get("assignees")),
        user=parse_author(data.get("author")),
        labels=_graphql_labels(data.get("labels")),
        milestone=parse_milestone(data.get("milestone")),
        repository_name=repository.get("name"),
        repository_owner=(repository.get("owner") or {}).get("login"),
        repository_url=repository.get("url"),
    )


def parse_graphql_user(data: Dict[str, Any]) -> User:
    """``{user: {...}}`` response to User, flattening commit contributions."""
    user = data["user"]
    contributions: List[CommitContribution] = []
    collection = user.get("contributionsCollection") or {}
    for repo_commits in collection.get("commitContributionsByRepository") or []:
        name = (repo_commits.get("repository") or {}).get("nameWithOwner") or ""
        for commit in nodes_of(repo_commits.get("contributions")):
            contributions.append(CommitContribution(created_at=commit["occurredAt"], repo_name_with_owner=name))
    return User(
        login=user["login"],
        url=user.get("url") or "",
        name=user.get("name"),
        avatar_url=user.get("avatarUrl"),
        bio=user.get("bio"),
        company=user.get("company"),
        location=user.get("location"),
        commit_contributions=contributions,
    )
