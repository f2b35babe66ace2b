"""
Heckel Diff Evaluator
=====================

Evaluates the engine's line mappings against a dataset of test cases.
Each case folder holds `old.*`, `new.*` and a `ground_truth.json`:

    {"mappings": {"1": 1, "2": -1}}

Usage:
    python -m heckel_diff.evaluator [data_dir]
"""
import argparse
import json
import logging
import os
import sys
from typing import Dict, Optional, Tuple
from .engine import HeckelEngine
from .errors import ReadError
from .input_controller import InputController

logger = logging.getLogger(__name__)

TRUTH_FILE = "ground_truth.json"


def parse_truth_json(json_path: str) -> Dict[int, int]:
    """
    Parses the JSON ground truth into {old_line: new_line}.

    Raises:
        ValueError: If the file is not JSON or "mappings" is not an object
            of line numbers.
    """
    with open(json_path, 'r') as f:
        data = json.load(f)

    mappings = data.get("mappings", {}) if isinstance(data, dict) else None
    if not isinstance(mappings, dict):
        raise ValueError(f"{json_path}: 'mappings' must be an object")
    try:
        return {int(old_line): int(new_line) for old_line, new_line in mappings.items()}
    except TypeError as exc:
        raise ValueError(f"{json_path}: line numbers must be integers") from exc


def predict(lines_old, lines_new) -> Dict[int, int]:
    """Maps every old line to its new line, or -1 when deleted."""
    predictions = {}
    for op in HeckelEngine(lines_old, lines_new).run(include_unchanged=True):
        old_line, new_line = op.as_mapping()
        if old_line != -1:
            predictions[old_line] = new_line
    return predictions


def score(truth: Dict[int, int], predictions: Dict[int, int]) -> Tuple[int, int]:
    """
    Returns:
        Tuple[int, int]: (correct, total) over the lines in the ground truth.
    """
    correct = sum(1 for old_line, new_line in truth.items()
                  if predictions.get(old_line, -1) == new_line)
    return correct, len(truth)


def find_case(folder_path: str) -> Optional[Tuple[str, str, str]]:
    files = sorted(os.listdir(folder_path))
    old_f = next((f for f in files if f.startswith("old.")), None)
    new_f = next((f for f in files if f.startswith("new.")), None)
    if not (old_f and new_f and TRUTH_FILE in files):
        return None
    return (os.path.join(folder_path, old_f), os.path.join(folder_path, new_f),
            os.path.join(folder_path, TRUTH_FILE))


def evaluate(data_dir: str, controller: InputController = None) -> Optional[float]:
    """
    Evaluates mapping accuracy on all test cases in the data directory.

    Args:
        data_dir (str): Directory whose subfolders are test cases.
        controller (InputController, optional): Reader for the case files.

    Returns:
        float: Overall accuracy in percent, or None when no case was found.
    """
    controller = controller or InputController()

    print(f"{'Test Case':<40} | {'Accuracy':<10}")
    print("-" * 55)

    total_lines = 0
    total_correct = 0
    file_count = 0

    for folder in sorted(os.listdir(data_dir)):
        folder_path = os.path.join(data_dir, folder)
        if not os.path.isdir(folder_path):
            continue

        case = find_case(folder_path)
        if case is None:
            logger.debug("skipping %s: incomplete case", folder)
            continue
        old_path, new_path, truth_path = case

        try:
            lines_old, lines_new = controller.parse(old_path, new_path)
            truth = parse_truth_json(truth_path)
        except (ReadError, ValueError) as e:
            print(f"{folder:<40} | ERROR: {e}")
            continue

        correct, lines = score(truth, predict(lines_old, lines_new))
        accuracy = (correct / lines * 100) if lines else 0
        print(f"{folder:<40} | {accuracy:.2f}%")

        total_lines += lines
        total_correct += correct
        file_count += 1

    if file_count == 0:
        print("\nNo valid test cases found in the specified directory.")
        return None

    global_acc = (total_correct / total_lines * 100) if total_lines else 0
    print("-" * 55)
    print(f"Overall Accuracy: {global_acc:.2f}% across {file_count} files.")
    return global_acc


def main(argv=None):
    parser = argparse.ArgumentParser(description="Heckel Diff Batch Evaluator")
    parser.add_argument("data_dir", nargs="?", default="data",
                        help="Path to data directory (default: data)")
    args = parser.parse_args(argv)

    if not os.path.isdir(args.data_dir):
        print(f"Error: Directory '{args.data_dir}' not found.", file=sys.stderr)
        return 1

    evaluate(args.data_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
