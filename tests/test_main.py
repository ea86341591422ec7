"""
Tests for the preview command line.
"""
import io
import unittest
from contextlib import redirect_stdout

from trivia.__main__ import main, parse_args


class TestPreviewCli(unittest.TestCase):

    def test_defaults(self):
        args = parse_args([])
        self.assertEqual(args.kind, "freeform")
        self.assertEqual(args.count, 3)
        self.assertIsNone(args.categories)

    def test_options(self):
        args = parse_args(["--kind", "multiple", "--count", "1", "--categories", "9", "Computers",
                           "--difficulty", "easy"])
        self.assertEqual(args.kind, "multiple")
        self.assertEqual(args.categories, ["9", "Computers"])
        self.assertEqual(args.difficulty, "easy")

    def test_list_categories(self):
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main(["--list-categories"]), 0)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 24)
        self.assertIn("Computers", lines[9])


if __name__ == '__main__':
    unittest.main()
