import logging
from typing import Iterable, List, Set
from .input_controller import read_lines
from .models import (Delete, DiffOp, Insert, Move, Occurrence, Resolved, Slot,
                     Unchanged, Unresolved)
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)


class HeckelEngine:
    """
    Heckel's symbol table diff between an old and a new sequence of lines.

    Passes 1 and 2 run on construction. Passes 3-5 link matching positions of
    OA and NA, and pass 6 walks NA in order to classify every line.
    """

    def __init__(self, lines_old: Iterable[str], lines_new: Iterable[str]):
        self.table = SymbolTable()
        self.oa: List[Slot] = []
        self.na: List[Slot] = []
        self._resolved = False

        # Pass 1: new file
        for line in lines_new:
            self.na.append(Unresolved(self.table.observe_new(line)))

        # Pass 2: old file
        for line in lines_old:
            self.oa.append(Unresolved(self.table.observe_old(line)))

        # Slots forget their record once resolved; these keep the text reachable.
        self._old_handles = [None] + [slot.handle for slot in self.oa] + [None]
        self._new_handles = [None] + [slot.handle for slot in self.na] + [None]

        # BEGIN and END sentinels, matched to each other
        self.na.insert(0, Resolved(0))
        self.oa.insert(0, Resolved(0))
        self.na.append(Resolved(len(self.oa)))
        self.oa.append(Resolved(len(self.na) - 1))

        logger.debug("populated %d old lines, %d new lines, %d distinct",
                     len(self.oa) - 2, len(self.na) - 2, len(self.table))

    def run(self, include_unchanged: bool = True) -> List[DiffOp]:
        """
        Resolves matches (once) and emits the diff.

        Args:
            include_unchanged: If False, Unchanged entries are left out and
                only the edit script remains.

        Returns:
            List of Insert, Delete, Move and Unchanged operations in new file
            order. Old lines skipped over by an anchor are emitted just before
            that anchor.
        """
        if not self._resolved:
            self._match_unique()
            self._propagate_forward()
            self._propagate_backward()
            self._resolved = True
        return self._emit(include_unchanged)

    def _link(self, i: int, j: int):
        self.na[i] = Resolved(j)
        self.oa[j] = Resolved(i)

    def _same_record(self, i: int, j: int) -> bool:
        a, b = self.na[i], self.oa[j]
        return (isinstance(a, Unresolved) and isinstance(b, Unresolved)
                and a.handle == b.handle)

    def _match_unique(self):
        """Pass 3: lines occurring exactly once in each file match each other."""
        linked = 0
        for i in range(1, len(self.na) - 1):
            slot = self.na[i]
            if not isinstance(slot, Unresolved): continue

            record = self.table[slot.handle]
            if record.old_count is Occurrence.ONE and record.new_count is Occurrence.ONE:
                self._link(i, record.old_line_number)
                linked += 1
        logger.debug("pass 3 matched %d unique lines", linked)

    def _propagate_forward(self):
        """Pass 4: extend each match onto the following pair of equal lines."""
        linked = 0
        for i in range(len(self.na) - 1):
            slot = self.na[i]
            if not isinstance(slot, Resolved): continue

            j = slot.index
            if self._same_record(i + 1, j + 1):
                self._link(i + 1, j + 1)
                linked += 1
        logger.debug("pass 4 linked %d lines", linked)

    def _propagate_backward(self):
        """Pass 5: extend each match onto the preceding pair of equal lines."""
        linked = 0
        for i in range(len(self.na) - 2, 0, -1):
            slot = self.na[i]
            if not isinstance(slot, Resolved): continue

            j = slot.index
            if self._same_record(i - 1, j - 1):
                self._link(i - 1, j - 1)
                linked += 1
        logger.debug("pass 5 linked %d lines", linked)

    def old_content(self, j: int) -> str:
        return self.table[self._old_handles[j]].content

    def new_content(self, i: int) -> str:
        return self.table[self._new_handles[i]].content

    def _emit(self, include_unchanged: bool) -> List[DiffOp]:
        """Pass 6: classify every line of both files."""
        results: List[DiffOp] = []
        moved: Set[int] = set()
        expected = self.na[0].index + 1

        def emit_gap(start, stop):
            # Old lines passed over by the walk; resolved ones reappear later in NA
            for k in range(start, stop):
                slot = self.oa[k]
                if isinstance(slot, Unresolved):
                    results.append(Delete(k, self.old_content(k)))
                elif k not in moved:
                    results.append(Move(k, slot.index, self.old_content(k)))
                    moved.add(k)

        for i in range(1, len(self.na) - 1):
            slot = self.na[i]
            if isinstance(slot, Unresolved):
                results.append(Insert(i, self.new_content(i)))
                continue

            j = slot.index
            if j < expected:
                if j not in moved:
                    results.append(Move(j, i, self.old_content(j)))
                    moved.add(j)
                continue

            if j > expected:
                emit_gap(expected, j)
            if include_unchanged:
                results.append(Unchanged(j, i, self.old_content(j)))
            expected = j + 1

        emit_gap(expected, len(self.oa) - 1)
        logger.debug("pass 6 emitted %d operations (%d moves)", len(results), len(moved))
        return results


def diff_lines(lines_old: Iterable[str], lines_new: Iterable[str],
               include_unchanged: bool = True) -> List[DiffOp]:
    """Diffs two sequences of lines already stripped of terminators."""
    return HeckelEngine(lines_old, lines_new).run(include_unchanged)


def diff_streams(old, new, include_unchanged: bool = True,
                 encoding: str = "utf-8") -> List[DiffOp]:
    """
    Diffs two readable streams, binary or text.

    Raises:
        ReadError: If either stream fails to read or decode.
    """
    lines_old = read_lines(old, "old", encoding=encoding)
    lines_new = read_lines(new, "new", encoding=encoding)
    return diff_lines(lines_old, lines_new, include_unchanged)
