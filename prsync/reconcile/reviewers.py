"""Current review state per reviewer."""

from typing import Dict, List, Sequence

from prsync.models import Account, ReviewEvent, ReviewState, Team, TimelineEvent

REQUESTED = "REQUESTED"
PENDING = "PENDING"


def parse_reviewers(
    requested_reviewers: Sequence[Account | Team],
    timeline_events: Sequence[TimelineEvent],
    author: Account,
) -> List[ReviewState]:
    """
    Build the reviewer list from submitted reviews and outstanding requests.

    Each reviewer keeps the state of their most recent non-pending review,
    replaced by REQUESTED while a request is outstanding. The author is
    never listed. Completed reviews sort before requests; each group is
    ordered case-insensitively by display label.
    """
    reviews = [e for e in timeline_events if isinstance(e, ReviewEvent) and e.state != PENDING]
    states: Dict[str, ReviewState] = {}
    seen = {author.identity()}

    # Newest first, so the first review seen per reviewer is the latest one
    for review in reversed(reviews):
        key = review.user.identity()
        if key in seen:
            continue
        seen.add(key)
        states[key] = ReviewState(reviewer=review.user, state=review.state)

    for request in requested_reviewers:
        key = request.identity()
        if key in states:
            states[key].state = REQUESTED
        elif key not in seen:
            seen.add(key)
            states[key] = ReviewState(reviewer=request, state=REQUESTED)

    return sorted(
        states.values(),
        key=lambda s: (s.state == REQUESTED, s.reviewer.display_label().lower()),
    )