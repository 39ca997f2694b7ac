"""Canonical data models for accounts, comments, timeline events and pull requests (Pydantic)."""

from prsync.models.account import GHOST_LOGIN, Account, Reviewer, Team, ghost_account
from prsync.models.comment import Comment, Reaction, ReviewThread
from prsync.models.diff_hunk import DiffChangeType, DiffHunk, DiffLine
from prsync.models.events import (
    AssignEvent,
    CommentEvent,
    CommitEvent,
    EventType,
    HeadRefDeleteEvent,
    LabelEvent,
    MergedEvent,
    MilestoneEvent,
    NewCommitsSinceReviewEvent,
    OtherEvent,
    ReviewEvent,
    TimelineEvent,
)
from prsync.models.pull_request import (
    AbbreviatedComment,
    CommitContribution,
    Issue,
    Label,
    MergeMethod,
    Milestone,
    PullRequest,
    PullRequestMergeability,
    Ref,
    RefRepository,
    ReviewState,
    SuggestedReviewer,
    User,
    ViewerPermission,
)

__all__ = [
    "GHOST_LOGIN",
    "AbbreviatedComment",
    "Account",
    "AssignEvent",
    "Comment",
    "CommentEvent",
    "CommitContribution",
    "CommitEvent",
    "DiffChangeType",
    "DiffHunk",
    "DiffLine",
    "EventType",
    "HeadRefDeleteEvent",
    "Issue",
    "Label",
    "LabelEvent",
    "MergeMethod",
    "MergedEvent",
    "Milestone",
    "MilestoneEvent",
    "NewCommitsSinceReviewEvent",
    "OtherEvent",
    "PullRequest",
    "PullRequestMergeability",
    "Reaction",
    "Ref",
    "RefRepository",
    "ReviewEvent",
    "ReviewState",
    "ReviewThread",
    "Reviewer",
    "SuggestedReviewer",
    "Team",
    "TimelineEvent",
    "User",
    "ViewerPermission",
    "ghost_account",
]
