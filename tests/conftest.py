"""Shared fixtures."""

import pytest

from payloads import author, commit, issue_comment, review


@pytest.fixture
def raw_timeline():
    """One item of every known kind plus an unknown one, in chronological order."""
    return [
        commit("aaa"),
        {
            "__typename": "LabeledEvent",
            "id": "LE_1",
            "actor": author("octocat"),
            "createdAt": "2024-01-14T10:00:00Z",
            "label": {"name": "bug", "color": "d73a4a"},
        },
        {
            "__typename": "MilestonedEvent",
            "id": "ME_1",
            "actor": author("octocat"),
            "createdAt": "2024-01-14T10:30:00Z",
            "milestoneTitle": "v1.0",
        },
        {"__typename": "AssignedEvent", "id": "AE_1", "actor": author("octocat"), "user": author("hubot")},
        issue_comment(11, "hubot"),
        review(21, "hubot", "APPROVED"),
        {
            "__typename": "MergedEvent",
            "id": "MEV_1",
            "actor": author("octocat"),
            "createdAt": "2024-01-16T10:00:00Z",
            "mergeRef": {"name": "main"},
            "commit": {"oid": "fff", "commitUrl": "https://github.com/o/r/commit/fff"},
            "url": "https://github.com/o/r/pull/1#event-1",
        },
        {
            "__typename": "HeadRefDeletedEvent",
            "id": "HRD_1",
            "actor": None,
            "createdAt": "2024-01-16T10:01:00Z",
            "headRefName": "feature",
        },
        {"__typename": "ReadyForReviewEvent", "id": "RFR_1"},
    ]
