"""Parse the unified diff hunk embedded in an inline review comment.

Positions are cumulative across hunks: the first ``@@`` header is position 0
and every following line (headers included) advances the position by one.
Lines before the first header and headers that do not match
``@@ -a[,b] [+c[,d]] @@`` are skipped. A missing length means 1.
"""

import re
from typing import Iterator, List

from prsync.models.diff_hunk import DiffChangeType, DiffHunk, DiffLine

DIFF_HUNK_HEADER = re.compile(r"^@@ -(\d+)(,(\d+))?( \+(\d+)(,(\d+)?)?)? @@")

_CHANGE_TYPES = {
    " ": DiffChangeType.CONTEXT,
    "+": DiffChangeType.ADD,
    "-": DiffChangeType.DELETE,
}


def get_diff_change_type(line: str) -> DiffChangeType:
    """Classify a diff line by its first character."""
    return _CHANGE_TYPES.get(line[:1], DiffChangeType.CONTROL)


def _length(value: str | None) -> int:
    return int(value) if value else 1


def _iter_hunks(patch: str) -> Iterator[DiffHunk]:
    hunk: DiffHunk | None = None
    position = -1
    old_line = -1
    new_line = -1

    for line in patch.splitlines():
        match = DIFF_HUNK_HEADER.match(line)
        if match:
            if hunk is not None:
                yield hunk
            if position == -1:
                position = 0
            old_line = int(match.group(1))
            new_line = int(match.group(5)) if match.group(5) else old_line
            hunk = DiffHunk(
                old_line_number=old_line,
                old_length=_length(match.group(3)),
                new_line_number=new_line,
                new_length=_length(match.group(7)),
                position_in_hunk=position,
            )
            hunk.diff_lines.append(
                DiffLine(
                    type=DiffChangeType.CONTROL,
                    old_line_number=-1,
                    new_line_number=-1,
                    position_in_hunk=position,
                    raw=line,
                )
            )
        elif hunk is not None:
            change = get_diff_change_type(line)
            if change == DiffChangeType.CONTROL:
                # "\ No newline at end of file" applies to the previous line
                if line.startswith("\\") and hunk.diff_lines:
                    hunk.diff_lines[-1].end_with_line_break = False
            else:
                hunk.diff_lines.append(
                    DiffLine(
                        type=change,
                        old_line_number=old_line if change != DiffChangeType.ADD else -1,
                        new_line_number=new_line if change != DiffChangeType.DELETE else -1,
                        position_in_hunk=position,
                        raw=line,
                    )
                )
                if change != DiffChangeType.ADD:
                    old_line += 1
                if change != DiffChangeType.DELETE:
                    new_line += 1
        if position != -1:
            position += 1

    if hunk is not None:
        yield hunk


class DiffHunkReader:
    """Lazy view over the hunks of a patch; every iteration starts from the top."""

    def __init__(self, patch: str | None) -> None:
        self._patch = patch or ""

    def __iter__(self) -> Iterator[DiffHunk]:
        return _iter_hunks(self._patch)


def parse_diff_hunk(patch: str | None) -> DiffHunkReader:
    """Return a restartable, lazily parsed sequence of hunks for ``patch``."""
    return DiffHunkReader(patch)


def parse_comment_diff_hunk(diff_hunk: str | None) -> List[DiffHunk]:
    """Parse all hunks of a comment's ``diff_hunk`` text."""
    return list(parse_diff_hunk(diff_hunk))
