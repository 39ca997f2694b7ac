"""Classify GraphQL timeline items and normalize them into TimelineEvent models."""

import logging
from typing import Any, Callable, Dict, List

from prsync.models import (
    AssignEvent,
    CommentEvent,
    CommitEvent,
    EventType,
    HeadRefDeleteEvent,
    Label,
    LabelEvent,
    MergedEvent,
    MilestoneEvent,
    OtherEvent,
    ReviewEvent,
    TimelineEvent,
)
from prsync.normalize.authors import convert_rest_user, parse_author
from prsync.normalize.comments import nodes_of, parse_graphql_comment

LOG = logging.getLogger("prsync.normalize.events")

GRAPHQL_EVENT_TYPES = {
    "PullRequestCommit": EventType.COMMITTED,
    "LabeledEvent": EventType.LABELED,
    "MilestonedEvent": EventType.MILESTONED,
    "AssignedEvent": EventType.ASSIGNED,
    "HeadRefDeletedEvent": EventType.HEAD_REF_DELETED,
    "IssueComment": EventType.COMMENTED,
    "PullRequestReview": EventType.REVIEWED,
    "MergedEvent": EventType.MERGED,
}


def convert_graphql_event_type(typename: str | None) -> EventType:
    """Map a ``__typename`` to an EventType; anything unknown is OTHER."""
    return GRAPHQL_EVENT_TYPES.get(typename or "", EventType.OTHER)


def _comment_event(data: Dict[str, Any]) -> CommentEvent:
    return CommentEvent(
        id=data["databaseId"],
        graph_node_id=data.get("id") or "",
        html_url=data.get("url") or "",
        body=data.get("body") or "",
        body_html=data.get("bodyHTML"),
        user=parse_author(data.get("author")),
        can_edit=bool(data.get("viewerCanUpdate")),
        can_delete=bool(data.get("viewerCanDelete")),
        created_at=data.get("createdAt"),
    )


def _review_event(data: Dict[str, Any]) -> ReviewEvent:
    return ReviewEvent(
        id=data["databaseId"],
        state=data.get("state") or "",
        user=parse_author(data.get("author")),
        submitted_at=data.get("submittedAt"),
        body=data.get("body") or "",
        body_html=data.get("bodyHTML"),
        html_url=data.get("url") or "",
        author_association=data.get("authorAssociation"),
    )


def _commit_event(data: Dict[str, Any]) -> CommitEvent:
    commit = data.get("commit") or {}
    git_author = commit.get("author") or {}
    if git_author.get("user"):
        author = parse_author(git_author["user"])
    else:
        # Commit author without a linked account: keep the git identity
        author = parse_author(
            {
                "login": git_author.get("name") or "",
                "avatarUrl": git_author.get("avatarUrl"),
                "email": git_author.get("email"),
                "url": "",
            }
        )
    return CommitEvent(
        id=data["id"],
        sha=commit.get("oid") or "",
        author=author,
        html_url=data.get("url") or "",
        message=commit.get("message") or "",
        authored_date=commit.get("authoredDate"),
    )


def _merged_event(data: Dict[str, Any]) -> MergedEvent:
    commit = data.get("commit") or {}
    return MergedEvent(
        id=data["id"],
        graph_node_id=data["id"],
        user=parse_author(data.get("actor")),
        created_at=data.get("createdAt"),
        merge_ref=(data.get("mergeRef") or {}).get("name") or "",
        sha=commit.get("oid") or "",
        commit_url=commit.get("commitUrl") or "",
        url=data.get("url") or "",
    )


def _assign_event(data: Dict[str, Any]) -> AssignEvent:
    return AssignEvent(
        id=data["id"],
        user=parse_author(data.get("user") or data.get("assignee")),
        actor=parse_author(data.get("actor")),
    )


def _head_ref_deleted_event(data: Dict[str, Any]) -> HeadRefDeleteEvent:
    return HeadRefDeleteEvent(
        id=data["id"],
        actor=parse_author(data.get("actor")),
        created_at=data.get("createdAt"),
        head_ref=data.get("headRefName") or "",
    )


def _label_event(data: Dict[str, Any]) -> LabelEvent:
    label = data.get("label") or {}
    return LabelEvent(
        id=data["id"],
        actor=parse_author(data.get("actor")),
        label=Label(name=label.get("name") or "", color=label.get("color") or ""),
        created_at=data.get("createdAt"),
    )


def _milestone_event(data: Dict[str, Any]) -> MilestoneEvent:
    return MilestoneEvent(
        id=data["id"],
        actor=parse_author(data.get("actor")),
        milestone_title=data.get("milestoneTitle") or "",
        created_at=data.get("createdAt"),
    )


def _other_event(data: Dict[str, Any]) -> OtherEvent:
    return OtherEvent(id=data.get("id"), typename=data.get("__typename") or "")


_PARSERS: Dict[EventType, Callable[[Dict[str, Any]], TimelineEvent]] = {
    EventType.COMMENTED: _comment_event,
    EventType.REVIEWED: _review_event,
    EventType.COMMITTED: _commit_event,
    EventType.MERGED: _merged_event,
    EventType.ASSIGNED: _assign_event,
    EventType.HEAD_REF_DELETED: _head_ref_deleted_event,
    EventType.LABELED: _label_event,
    EventType.MILESTONED: _milestone_event,
    EventType.OTHER: _other_event,
}


def parse_graphql_timeline_events(events: List[Dict[str, Any]]) -> List[TimelineEvent]:
    """Normalize raw GraphQL timeline items, keeping their order.

    Builds new models on every call; the input is not modified.
    """
    normalized: List[TimelineEvent] = []
    for data in events:
        event_type = convert_graphql_event_type(data.get("__typename"))
        parser = _PARSERS.get(event_type)
        if parser is None:
            LOG.debug("Drop timeline item without parser: %s", data.get("__typename"))
            continue
        normalized.append(parser(data))
    return normalized


def parse_graphql_review_event(data: Dict[str, Any]) -> ReviewEvent:
    """Submitted review with its top-level (non-reply) inline comments."""
    comments = [parse_graphql_comment(c, False) for c in nodes_of(data.get("comments"))]
    event = _review_event(data)
    event.comments = [c for c in comments if c.in_reply_to_id is None]
    return event


def convert_rest_review_event(data: Dict[str, Any]) -> ReviewEvent:
    """REST review (e.g. the response of creating a review) to ReviewEvent."""
    user = data.get("user") or {}
    return ReviewEvent(
        id=data["id"],
        state=data.get("state") or "",
        user=convert_rest_user(user),
        submitted_at=data.get("submitted_at") or None,
        body=data.get("body") or "",
        body_html=data.get("body"),
        html_url=data.get("html_url") or "",
        author_association=user.get("type"),
    )
