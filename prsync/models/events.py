"""Timeline events: one model per event kind, joined in a discriminated union."""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

from prsync.models.account import Account
from prsync.models.comment import Comment
from prsync.models.pull_request import Label


class EventType(str, Enum):
    """Canonical event kinds."""

    COMMITTED = "Committed"
    LABELED = "Labeled"
    MILESTONED = "Milestoned"
    ASSIGNED = "Assigned"
    HEAD_REF_DELETED = "HeadRefDeleted"
    COMMENTED = "Commented"
    REVIEWED = "Reviewed"
    MERGED = "Merged"
    OTHER = "Other"
    NEW_COMMITS_SINCE_REVIEW = "NewCommitsSinceReview"


class CommitEvent(BaseModel):
    event: Literal[EventType.COMMITTED] = EventType.COMMITTED
    id: str
    sha: str
    author: Account
    html_url: str = ""
    message: str = ""
    authored_date: datetime | None = None


class LabelEvent(BaseModel):
    event: Literal[EventType.LABELED] = EventType.LABELED
    id: str
    actor: Account
    label: Label
    created_at: datetime | None = None


class MilestoneEvent(BaseModel):
    event: Literal[EventType.MILESTONED] = EventType.MILESTONED
    id: str
    actor: Account
    milestone_title: str = ""
    created_at: datetime | None = None


class AssignEvent(BaseModel):
    event: Literal[EventType.ASSIGNED] = EventType.ASSIGNED
    id: str
    user: Account
    actor: Account


class HeadRefDeleteEvent(BaseModel):
    event: Literal[EventType.HEAD_REF_DELETED] = EventType.HEAD_REF_DELETED
    id: str
    actor: Account
    created_at: datetime | None = None
    head_ref: str = ""


class CommentEvent(BaseModel):
    """Issue comment on the conversation tab."""

    event: Literal[EventType.COMMENTED] = EventType.COMMENTED
    id: int
    graph_node_id: str = ""
    html_url: str = ""
    body: str = ""
    body_html: str | None = None
    user: Account
    can_edit: bool = False
    can_delete: bool = False
    created_at: datetime | None = None


class ReviewEvent(BaseModel):
    """Submitted (or pending) review. ``state`` is passed through from upstream."""

    event: Literal[EventType.REVIEWED] = EventType.REVIEWED
    id: int
    state: str
    user: Account
    comments: List[Comment] = Field(default_factory=list)
    submitted_at: datetime | None = None
    body: str = ""
    body_html: str | None = None
    html_url: str = ""
    author_association: str | None = None


class MergedEvent(BaseModel):
    event: Literal[EventType.MERGED] = EventType.MERGED
    id: str
    graph_node_id: str = ""
    user: Account
    created_at: datetime | None = None
    merge_ref: str = ""
    sha: str = ""
    commit_url: str = ""
    url: str = ""


class OtherEvent(BaseModel):
    """Event with a discriminator this package does not model."""

    event: Literal[EventType.OTHER] = EventType.OTHER
    id: str | None = None
    typename: str = ""


class NewCommitsSinceReviewEvent(BaseModel):
    """Synthetic marker placed before commits pushed after the viewer's last review."""

    event: Literal[EventType.NEW_COMMITS_SINCE_REVIEW] = EventType.NEW_COMMITS_SINCE_REVIEW
    id: str


TimelineEvent = Annotated[
    Union[
        CommitEvent,
        LabelEvent,
        MilestoneEvent,
        AssignEvent,
        HeadRefDeleteEvent,
        CommentEvent,
        ReviewEvent,
        MergedEvent,
        OtherEvent,
        NewCommitsSinceReviewEvent,
    ],
    Field(discriminator="event"),
]
