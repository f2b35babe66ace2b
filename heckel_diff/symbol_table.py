from typing import Dict, List
from .models import LineRecord, Occurrence


class SymbolTable:
    """
    Arena of LineRecords, one per distinct line content across both files.

    Records are addressed by integer handle, so two positions share a record
    exactly when their handles are equal.
    """

    def __init__(self):
        self.records: List[LineRecord] = []
        self._handles: Dict[str, int] = {}
        self._old_lines_seen = 0

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, handle: int) -> LineRecord:
        return self.records[handle]

    def observe_new(self, line: str) -> int:
        """
        Records one occurrence of `line` in the new file.

        Returns:
            int: Handle of the line's record.
        """
        handle = self._handles.get(line)
        if handle is None:
            return self._create(line, Occurrence.ZERO, Occurrence.ONE, None)

        record = self.records[handle]
        record.new_count = record.new_count.increment()
        return handle

    def observe_old(self, line: str) -> int:
        """
        Records one occurrence of `line` in the old file and stamps the record
        with the current 1-based old line number.

        Returns:
            int: Handle of the line's record.
        """
        self._old_lines_seen += 1
        handle = self._handles.get(line)
        if handle is None:
            return self._create(line, Occurrence.ONE, Occurrence.ZERO, self._old_lines_seen)

        record = self.records[handle]
        record.old_count = record.old_count.increment()
        record.old_line_number = self._old_lines_seen
        return handle

    def _create(self, line, old_count, new_count, old_line_number) -> int:
        handle = len(self.records)
        self.records.append(LineRecord(old_count, new_count, old_line_number, line))
        self._handles[line] = handle
        return handle
