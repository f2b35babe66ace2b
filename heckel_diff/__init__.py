"""
Heckel Diff Package
===================

This package implements Paul Heckel's symbol table algorithm for line-level
differencing. Every line of the old and new file is classified as unchanged,
inserted, deleted or moved in linear time.

Modules:
    - engine: The matcher (population, unique-match, propagation and emission passes).
    - symbol_table: Shared per-line records keyed by content.
    - input_controller: Reads streams, file pairs and combined files.
    - models: Data structures (LineRecord, slots, diff operations).
    - errors: ReadError.
    - evaluator: Accuracy of the mappings against ground truth.
    - utils: Line normalization.
"""
from .engine import HeckelEngine, diff_lines, diff_streams
from .errors import ReadError
from .models import Delete, Insert, Move, Unchanged

__all__ = [
    "HeckelEngine", "diff_lines", "diff_streams", "ReadError",
    "Insert", "Delete", "Move", "Unchanged",
]
