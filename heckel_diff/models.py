from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Occurrence(Enum):
    """
    How many times a line occurs in one file. Only the boundary between
    "exactly one" and "more than one" matters to the algorithm.
    """
    ZERO = 0
    ONE = 1
    MANY = 2

    def increment(self) -> "Occurrence":
        if self is Occurrence.ZERO: return Occurrence.ONE
        return Occurrence.MANY


@dataclass
class LineRecord:
    """
    Symbol table entry shared by every position holding the same content.

    Attributes:
        old_count (Occurrence): Occurrences in the old file.
        new_count (Occurrence): Occurrences in the new file.
        old_line_number (int): Last 1-based line number seen in the old file.
            Only meaningful while old_count is ONE.
        content (str): The line text.
    """
    old_count: Occurrence
    new_count: Occurrence
    old_line_number: Optional[int]
    content: str


@dataclass(frozen=True)
class Unresolved:
    """Position still pointing at its symbol table record."""
    handle: int


@dataclass(frozen=True)
class Resolved:
    """Position matched to `index` in the other file."""
    index: int


Slot = Union[Unresolved, Resolved]


@dataclass(frozen=True)
class Insert:
    new_line: int
    content: str
    kind = "insert"

    def as_mapping(self) -> Tuple[int, int]:
        return -1, self.new_line


@dataclass(frozen=True)
class Delete:
    old_line: int
    content: str
    kind = "delete"

    def as_mapping(self) -> Tuple[int, int]:
        return self.old_line, -1


@dataclass(frozen=True)
class Move:
    old_line: int
    new_line: int
    content: str
    kind = "move"

    def as_mapping(self) -> Tuple[int, int]:
        return self.old_line, self.new_line


@dataclass(frozen=True)
class Unchanged:
    old_line: int
    new_line: int
    content: str
    kind = "unchanged"

    def as_mapping(self) -> Tuple[int, int]:
        return self.old_line, self.new_line


DiffOp = Union[Insert, Delete, Move, Unchanged]
