"""
One sync cycle for a pull request.

Steps run in a fixed order: normalize the raw timeline, regroup commits
made since the viewer's last review, compute reviewer states from the
regrouped timeline, then (optionally) enrich avatars. Each cycle builds
fresh models; only the avatar resolver's cache outlives it.
"""

import logging
from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, Field

from prsync.avatars import AvatarResolver
from prsync.models import Account, PullRequest, ReviewState, Team, TimelineEvent
from prsync.normalize.events import parse_graphql_timeline_events
from prsync.normalize.pull_requests import parse_graphql_pull_request
from prsync.reconcile.commits import insert_new_commits_since_review
from prsync.reconcile.reviewers import parse_reviewers

LOG = logging.getLogger("prsync.sync")


class PullRequestTimeline(BaseModel):
    """Everything a renderer needs for one pull request."""

    pull_request: PullRequest
    events: List[TimelineEvent] = Field(default_factory=list)
    reviewers: List[ReviewState] = Field(default_factory=list)


def build_timeline(
    pull_request: PullRequest,
    raw_events: List[Dict[str, Any]],
    requested_reviewers: Sequence[Account | Team] = (),
    current_user: str = "",
    latest_review_commit_oid: str | None = None,
) -> PullRequestTimeline:
    """Normalize and reconcile the timeline of an already parsed pull request."""
    events = parse_graphql_timeline_events(raw_events)
    events = insert_new_commits_since_review(events, latest_review_commit_oid, current_user, pull_request.head)
    reviewers = parse_reviewers(requested_reviewers, events, pull_request.user)
    LOG.debug(
        "PR #%s: %s events, %s reviewers",
        pull_request.number,
        len(events),
        len(reviewers),
    )
    return PullRequestTimeline(pull_request=pull_request, events=events, reviewers=reviewers)


def sync_pull_request(
    raw_pull_request: Dict[str, Any],
    raw_events: List[Dict[str, Any]],
    requested_reviewers: Sequence[Account | Team] = (),
    current_user: str = "",
    latest_review_commit_oid: str | None = None,
    avatars: AvatarResolver | None = None,
) -> PullRequestTimeline:
    """Run a full cycle from GraphQL payloads; avatar enrichment only when a resolver is given."""
    pull_request = parse_graphql_pull_request(raw_pull_request)
    timeline = build_timeline(
        pull_request,
        raw_events,
        requested_reviewers=requested_reviewers,
        current_user=current_user,
        latest_review_commit_oid=latest_review_commit_oid,
    )
    if avatars is not None:
        avatars.replace_account_avatar_urls(pull_request)
        avatars.replace_timeline_event_avatar_urls(timeline.events)
        avatars.replace_all(state.reviewer for state in timeline.reviewers)
    LOG.info("Synced PR #%s (%s events)", pull_request.number, len(timeline.events))
    return timeline
