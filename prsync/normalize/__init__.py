"""Convert raw REST and GraphQL payloads into the canonical models."""

from prsync.normalize.authors import convert_rest_user, parse_author
from prsync.normalize.comments import (
    convert_rest_comment,
    parse_graphql_comment,
    parse_graphql_issue_comment,
    parse_graphql_reaction,
    parse_graphql_review_thread,
)
from prsync.normalize.events import (
    convert_graphql_event_type,
    convert_rest_review_event,
    parse_graphql_review_event,
    parse_graphql_timeline_events,
)
from prsync.normalize.pull_requests import (
    convert_rest_issue,
    convert_rest_pull_request,
    parse_graphql_issue,
    parse_graphql_pull_request,
    parse_graphql_user,
    parse_merge_method,
    parse_mergeability,
    parse_viewer_permission,
)
from prsync.normalize.refs import convert_rest_ref, parse_graphql_ref

__all__ = [
    "convert_graphql_event_type",
    "convert_rest_comment",
    "convert_rest_issue",
    "convert_rest_pull_request",
    "convert_rest_ref",
    "convert_rest_review_event",
    "convert_rest_user",
    "parse_author",
    "parse_graphql_comment",
    "parse_graphql_issue",
    "parse_graphql_issue_comment",
    "parse_graphql_pull_request",
    "parse_graphql_reaction",
    "parse_graphql_ref",
    "parse_graphql_review_event",
    "parse_graphql_review_thread",
    "parse_graphql_timeline_events",
    "parse_graphql_user",
    "parse_merge_method",
    "parse_mergeability",
    "parse_viewer_permission",
]
