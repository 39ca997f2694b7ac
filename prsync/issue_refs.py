"""Issue references in text (``owner/repo#1``, ``GH-1``, ``#1``, issue/PR URLs) and title helpers."""

import re
from typing import Match

from pydantic import BaseModel

from prsync.models import Issue

ISSUE_EXPRESSION = re.compile(r"(([A-Za-z0-9_.\-]+)/([A-Za-z0-9_.\-]+))?(#|GH-)([1-9][0-9]*)($|\b)")
ISSUE_OR_URL_EXPRESSION = re.compile(
    r"(https?://github\.com/(([^\s]+)/([^\s]+))/([^\s]+/)?(issues|pull)/([0-9]+)(#issuecomment-([0-9]+))?)"
    r"|(([A-Za-z0-9_.\-]+)/([A-Za-z0-9_.\-]+))?(#|GH-)([1-9][0-9]*)($|\b)"
)

_TITLE_STRIP = re.compile(r"""[~^:;'".,#?%*\[\]@\\{}()]|//""")
_VARIABLE = re.compile(r"\$\{(.*?)\}")

# Group counts including the whole match, as returned by each expression
_SHORT_FORM_GROUPS = 7
_URL_FORM_GROUPS = 16


class ParsedIssue(BaseModel):
    owner: str | None = None
    name: str | None = None
    issue_number: int
    comment_number: int | None = None


class RepoDefaults(BaseModel):
    """Repository new issues and branches default to."""

    owner: str
    repo: str


def parse_issue_expression_output(match: Match[str] | None) -> ParsedIssue | None:
    """Extract owner, name, issue and comment numbers from either expression's match."""
    if match is None:
        return None
    output = [match.group(0), *match.groups()]
    if len(output) == _SHORT_FORM_GROUPS:
        return ParsedIssue(owner=output[2], name=output[3], issue_number=int(output[5]))
    if len(output) == _URL_FORM_GROUPS:
        number = output[7] or output[14]
        return ParsedIssue(
            owner=output[3] or output[11],
            name=output[4] or output[12],
            issue_number=int(number),
            comment_number=int(output[9]) if output[9] is not None else None,
        )
    return None


def parse_issue_reference(text: str) -> ParsedIssue | None:
    """First issue reference (short form or URL) found in ``text``."""
    return parse_issue_expression_output(ISSUE_OR_URL_EXPRESSION.search(text))


def get_issue_number_label_from_parsed(parsed: ParsedIssue) -> str:
    if not parsed.owner or not parsed.name:
        return f"#{parsed.issue_number}"
    return f"{parsed.owner}/{parsed.name}#{parsed.issue_number}"


def get_issue_number_label(issue: Issue, defaults: RepoDefaults | None = None) -> str:
    """``#N``, qualified with owner/name when the issue lives outside ``defaults``."""
    parsed = ParsedIssue(issue_number=issue.number)
    owner = issue.repository_owner or ""
    name = issue.repository_name or ""
    if defaults and (defaults.owner.lower() != owner.lower() or defaults.repo.lower() != name.lower()):
        parsed.owner = owner
        parsed.name = name
    return get_issue_number_label_from_parsed(parsed)


def sanitize_issue_title(title: str) -> str:
    """Make an issue title usable as a branch name fragment."""
    return re.sub(r"\s+", "-", _TITLE_STRIP.sub("", title).strip()[:150])


def variable_substitution(
    value: str,
    issue: Issue | None = None,
    defaults: RepoDefaults | None = None,
    user: str | None = None,
) -> str:
    """Replace ``${name}`` placeholders; unknown or unresolvable ones are left as is."""

    def replace(match: Match[str]) -> str:
        variable = match.group(1)
        if variable == "user":
            return user or match.group(0)
        if variable in ("repository", "owner"):
            if defaults is None:
                return match.group(0)
            return defaults.repo if variable == "repository" else defaults.owner
        if issue is None:
            return match.group(0)
        if variable == "issueNumber":
            return str(issue.number)
        if variable == "issueNumberLabel":
            return get_issue_number_label(issue, defaults)
        if variable == "issueTitle":
            return issue.title
        if variable == "sanitizedIssueTitle":
            return sanitize_issue_title(issue.title)
        if variable == "sanitizedLowercaseIssueTitle":
            return sanitize_issue_title(issue.title).lower()
        return match.group(0)

    return _VARIABLE.sub(replace, value)


def get_pr_fetch_query(repo: str, user: str, query: str) -> str:
    """Search query for pull requests of ``repo``, with ``${user}`` filled in."""
    search = query.replace("${user}", user)
    return f"is:pull-request {search} type:pr repo:{repo}"
