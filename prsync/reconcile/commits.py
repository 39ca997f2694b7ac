"""Group commits pushed after the viewer's last review under a marker event."""

import logging
from typing import List, Sequence

from prsync.models import CommitEvent, NewCommitsSinceReviewEvent, Ref, ReviewEvent, TimelineEvent

LOG = logging.getLogger("prsync.reconcile.commits")


def insert_new_commits_since_review(
    timeline_events: Sequence[TimelineEvent],
    latest_review_commit_oid: str | None,
    current_user: str,
    head: Ref | None,
) -> List[TimelineEvent]:
    """
    Return a copy of the timeline with a NewCommitsSinceReview marker.

    Walks from the newest event back to (not including) the first one. The
    newest review by ``current_user`` is the insertion point; commits older
    than that review are moved to follow it until the commit reviewed
    (``latest_review_commit_oid``) is reached. The marker, then the moved
    commits in their original order, are placed right after the review.

    Nothing changes when there is no reviewed commit, the head ref is gone,
    the head is still at the reviewed commit, or the reviewed commit is not
    found; the input sequence itself is never modified.
    """
    events = list(timeline_events)
    if not latest_review_commit_oid or head is None or head.sha == latest_review_commit_oid:
        return events

    work = list(events)
    review_index = len(work) - 1
    in_review_run = False
    moved: List[TimelineEvent] = []

    for i in range(len(work) - 1, 0, -1):
        event = work[i]
        if isinstance(event, CommitEvent) and event.sha == latest_review_commit_oid:
            moved.insert(0, NewCommitsSinceReviewEvent(id=latest_review_commit_oid))
            work[review_index + 1 : review_index + 1] = moved
            return work
        if in_review_run and isinstance(event, CommitEvent):
            moved.insert(0, event)
            del work[i]
            review_index -= 1
        elif not in_review_run and isinstance(event, ReviewEvent) and event.user.login == current_user:
            review_index = i
            in_review_run = True

    LOG.debug("Reviewed commit %s not found in timeline; leaving order unchanged", latest_review_commit_oid)
    return events
