"""Inline and issue comments, and the review threads that group them."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from prsync.models.account import Account
from prsync.models.diff_hunk import DiffHunk


class Reaction(BaseModel):
    """Aggregated reaction on a comment."""

    label: str
    count: int
    viewer_has_reacted: bool = False


class Comment(BaseModel):
    """Canonical comment.

    ``diff_hunks`` is always derived from ``diff_hunk`` by the normalizers;
    ``is_resolved`` mirrors the owning review thread.
    """

    id: int
    graph_node_id: str = ""
    url: str = ""
    html_url: str = ""
    body: str = ""
    body_html: str | None = None
    path: str | None = None
    diff_hunk: str = ""
    diff_hunks: List[DiffHunk] = Field(default_factory=list)
    position: int | None = None
    original_position: int | None = None
    commit_id: str | None = None
    original_commit_id: str | None = None
    pull_request_review_id: int | None = None
    user: Account
    created_at: datetime | None = None
    can_edit: bool = False
    can_delete: bool = False
    is_draft: bool = False
    in_reply_to_id: int | None = None
    reactions: List[Reaction] = Field(default_factory=list)
    is_resolved: bool = False


class ReviewThread(BaseModel):
    """Comments anchored to one file location, resolved or unresolved together."""

    id: str
    pr_review_database_id: int | None = None
    is_resolved: bool = False
    viewer_can_resolve: bool = False
    viewer_can_unresolve: bool = False
    path: str
    start_line: int | None = None
    end_line: int | None = None
    original_start_line: int | None = None
    original_end_line: int | None = None
    diff_side: str = "RIGHT"
    is_outdated: bool = False
    subject_type: str = "LINE"
    comments: List[Comment] = Field(default_factory=list)
