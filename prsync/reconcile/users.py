"""People who took part in a timeline (commit authors, reviewers, commenters)."""

from typing import List, Sequence

from pydantic import BaseModel

from prsync.models import CommentEvent, CommitEvent, ReviewEvent, TimelineEvent


class RelatedUser(BaseModel):
    login: str
    name: str


def get_related_users(timeline_events: Sequence[TimelineEvent]) -> List[RelatedUser]:
    """One entry per participating event, in timeline order (not deduplicated)."""
    users: List[RelatedUser] = []
    for event in timeline_events:
        if isinstance(event, CommitEvent):
            users.append(RelatedUser(login=event.author.login, name=event.author.name or ""))
        elif isinstance(event, (ReviewEvent, CommentEvent)):
            name = event.user.name if event.user.name is not None else event.user.login
            users.append(RelatedUser(login=event.user.login, name=name))
    return users
