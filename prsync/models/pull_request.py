"""Issue and pull request records, refs, and the small enumerations they use."""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from prsync.models.account import Account, Reviewer


class PullRequestMergeability(str, Enum):
    NOT_MERGEABLE = "NotMergeable"
    MERGEABLE = "Mergeable"
    CONFLICT = "Conflict"
    UNKNOWN = "Unknown"
    BEHIND = "Behind"


class MergeMethod(str, Enum):
    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


class ViewerPermission(str, Enum):
    ADMIN = "ADMIN"
    MAINTAIN = "MAINTAIN"
    WRITE = "WRITE"
    TRIAGE = "TRIAGE"
    READ = "READ"
    UNKNOWN = "UNKNOWN"


class Label(BaseModel):
    name: str = ""
    color: str = ""


class Milestone(BaseModel):
    title: str
    id: str
    created_at: datetime | None = None
    due_on: datetime | None = None


class RefRepository(BaseModel):
    """Repository a branch ref lives in (the fork for cross-repo pull requests)."""

    clone_url: str
    is_in_organization: bool = False
    owner: str
    name: str


class Ref(BaseModel):
    """Branch ref at a given commit. Absent on the owning record when the branch was deleted."""

    label: str
    ref: str
    sha: str
    repo: RefRepository


class AbbreviatedComment(BaseModel):
    author: Account
    body: str = ""
    database_id: int


class SuggestedReviewer(Account):
    is_author: bool = False
    is_commenter: bool = False


class ReviewState(BaseModel):
    """Current review state of one reviewer.

    ``state`` is one of APPROVED, CHANGES_REQUESTED, COMMENTED, DISMISSED
    (passed through from upstream) or the synthetic REQUESTED.
    """

    reviewer: Reviewer
    state: str


class Issue(BaseModel):
    """Issue as normalized from REST or GraphQL."""

    id: int
    graph_node_id: str = ""
    number: int
    url: str = ""
    state: str = "open"
    title: str = ""
    title_html: str | None = None
    body: str = ""
    body_html: str | None = None
    user: Account
    assignees: List[Account] | None = None
    labels: List[Label] = Field(default_factory=list)
    milestone: Milestone | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    repository_name: str | None = None
    repository_owner: str | None = None
    repository_url: str | None = None


class PullRequest(Issue):
    """Pull request; ``head``/``base`` are None when the upstream branch is gone."""

    head: Ref | None = None
    base: Ref | None = None
    is_remote_head_deleted: bool = False
    is_remote_base_deleted: bool = False
    merged: bool = False
    mergeable: PullRequestMergeability | None = None
    is_draft: bool = False
    auto_merge: bool = False
    auto_merge_method: MergeMethod | None = None
    allow_auto_merge: bool = False
    suggested_reviewers: List[SuggestedReviewer] = Field(default_factory=list)
    comments: List[AbbreviatedComment] | None = None


class CommitContribution(BaseModel):
    created_at: datetime
    repo_name_with_owner: str


class User(BaseModel):
    """User profile with recent commit contributions."""

    login: str
    url: str = ""
    name: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    commit_contributions: List[CommitContribution] = Field(default_factory=list)
