"""Structured form of a unified diff hunk."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class DiffChangeType(str, Enum):
    """Kind of a single diff line."""

    CONTEXT = "context"
    ADD = "add"
    DELETE = "delete"
    CONTROL = "control"


class DiffLine(BaseModel):
    """One line of a hunk with its old/new line numbers (-1 when not applicable)."""

    type: DiffChangeType
    old_line_number: int
    new_line_number: int
    position_in_hunk: int
    raw: str
    end_with_line_break: bool = True

    @property
    def text(self) -> str:
        """Line content without the leading change marker."""
        if self.type == DiffChangeType.CONTROL:
            return self.raw
        return self.raw[1:]


class DiffHunk(BaseModel):
    """Contiguous span of a diff, starting at its @@ header."""

    old_line_number: int
    old_length: int
    new_line_number: int
    new_length: int
    position_in_hunk: int
    diff_lines: List[DiffLine] = Field(default_factory=list)

    @property
    def header(self) -> str:
        """Serialize the ranges back to a unified diff header."""
        return f"@@ -{self.old_line_number},{self.old_length} +{self.new_line_number},{self.new_length} @@"

    @property
    def changed_lines(self) -> List[DiffLine]:
        return [line for line in self.diff_lines if line.type in (DiffChangeType.ADD, DiffChangeType.DELETE)]
