import os
import subprocess
import sys
import tempfile
import unittest


class TestAcceptance(unittest.TestCase):
    """
    Acceptance Tests: Verify the application from the user's perspective (CLI).
    """

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, name, text):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w") as f: f.write(text)
        return path

    def run_cli(self, *args):
        return subprocess.run(
            [sys.executable, "-m", "heckel_diff", *args],
            capture_output=True,
            text=True
        )

    def test_cli_help(self):
        """Test that --help runs without error."""
        result = self.run_cli("--help")
        self.assertEqual(result.returncode, 0)
        self.assertIn("Heckel Diff", result.stdout)

    def test_cli_basic_flow(self):
        """Test running on a file pair."""
        old = self.write("old.txt", "A\nB\nC\n")
        new = self.write("new.txt", "B\nC\nA\n")
        result = self.run_cli(old, new)
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout.splitlines(), [
            "move 1 -> 3",
            "unchanged 2 -> 1",
            "unchanged 3 -> 2",
        ])

    def test_cli_edits_only_combined(self):
        """Test a combined file with unchanged lines left out."""
        combined = self.write("combined.txt",
                              "--- OLD FILE ---\nA\nB\nC\n--- NEW FILE ---\nA\nC\nD\n")
        result = self.run_cli(combined, "--edits-only")
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout.splitlines(), ["delete 2 -> -1", "insert -1 -> 3"])

    def test_cli_missing_file(self):
        """Test error handling for missing files."""
        old = self.write("old.txt", "A\n")
        result = self.run_cli(old, os.path.join(self.tmp.name, "non_existent_file.txt"))
        self.assertEqual(result.returncode, 1)
        self.assertIn("Error: cannot read new input", result.stderr)


if __name__ == '__main__':
    unittest.main()
