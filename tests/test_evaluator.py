import contextlib
import io
import json
import os
import tempfile
import unittest
from heckel_diff.evaluator import evaluate, main, parse_truth_json, predict, score


class TestScoring(unittest.TestCase):
    def test_predict(self):
        predictions = predict(["A", "B", "C"], ["B", "C", "A", "D"])
        self.assertEqual(predictions, {1: 3, 2: 1, 3: 2})

    def test_predict_deletions(self):
        self.assertEqual(predict(["A", "B"], ["A"]), {1: 1, 2: -1})

    def test_score(self):
        truth = {1: 1, 2: -1, 3: 2}
        self.assertEqual(score(truth, {1: 1, 2: -1, 3: 5}), (2, 3))
        # Lines absent from the prediction count as deleted
        self.assertEqual(score({4: -1}, {}), (1, 1))


class TestEvaluate(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        case = os.path.join(self.tmp.name, "case_01")
        os.mkdir(case)
        with open(os.path.join(case, "old.txt"), "w") as f: f.write("a\nb\nc\n")
        with open(os.path.join(case, "new.txt"), "w") as f: f.write("a\nc\n")
        with open(os.path.join(case, "ground_truth.json"), "w") as f:
            json.dump({"mappings": {"1": 1, "2": -1, "3": 2}}, f)
        # Incomplete folder is skipped
        os.mkdir(os.path.join(self.tmp.name, "case_02"))

    def tearDown(self):
        self.tmp.cleanup()

    def test_evaluate(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            accuracy = evaluate(self.tmp.name)
        self.assertEqual(accuracy, 100.0)
        self.assertIn("case_01", out.getvalue())
        self.assertNotIn("case_02", out.getvalue())

    def add_case(self, name, truth):
        case = os.path.join(self.tmp.name, name)
        os.mkdir(case)
        with open(os.path.join(case, "old.txt"), "w") as f: f.write("a\n")
        with open(os.path.join(case, "new.txt"), "w") as f: f.write("a\n")
        with open(os.path.join(case, "ground_truth.json"), "w") as f: f.write(truth)
        return case

    def test_parse_truth_rejects_non_object_mappings(self):
        case = self.add_case("case_list", json.dumps({"mappings": [[1, 1]]}))
        with self.assertRaises(ValueError):
            parse_truth_json(os.path.join(case, "ground_truth.json"))

    def test_parse_truth_rejects_null_line(self):
        case = self.add_case("case_null", json.dumps({"mappings": {"1": None}}))
        with self.assertRaises(ValueError):
            parse_truth_json(os.path.join(case, "ground_truth.json"))

    def test_malformed_case_does_not_stop_batch(self):
        self.add_case("case_00_bad", json.dumps({"mappings": [1, 2]}))
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            accuracy = evaluate(self.tmp.name)
        self.assertEqual(accuracy, 100.0)
        self.assertIn("case_00_bad", out.getvalue())
        self.assertIn("ERROR", out.getvalue())
        self.assertIn("case_01", out.getvalue())

    def test_evaluate_empty(self):
        with tempfile.TemporaryDirectory() as empty:
            with contextlib.redirect_stdout(io.StringIO()):
                self.assertIsNone(evaluate(empty))

    def test_main_missing_dir(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = main([os.path.join(self.tmp.name, "missing")])
        self.assertEqual(code, 1)
        self.assertIn("not found", err.getvalue())


if __name__ == '__main__':
    unittest.main()
