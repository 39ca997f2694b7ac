"""Views derived from a normalized timeline."""

from prsync.reconcile.commits import insert_new_commits_since_review
from prsync.reconcile.reviewers import REQUESTED, parse_reviewers
from prsync.reconcile.users import RelatedUser, get_related_users

__all__ = [
    "REQUESTED",
    "RelatedUser",
    "get_related_users",
    "insert_new_commits_since_review",
    "parse_reviewers",
]
