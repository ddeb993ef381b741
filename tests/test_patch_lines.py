import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from prdiff.patch_lines import (
    KIND_ADD,
    KIND_CONTEXT,
    KIND_REMOVE,
    HunkStart,
    LineRecord,
    classify_patch_lines,
    parse_hunk_header,
)


class TestParseHunkHeader(unittest.TestCase):
    def test_parses_starts_with_and_without_counts(self):
        self.assertEqual(parse_hunk_header("@@ -1,2 +1,3 @@"), HunkStart(1, 1))
        self.assertEqual(parse_hunk_header("@@ -10 +12 @@"), HunkStart(10, 12))
        self.assertEqual(parse_hunk_header("@@ -7,0 +8,4 @@ def compute():"), HunkStart(7, 8))

    def test_counts_are_not_validated(self):
        self.assertEqual(parse_hunk_header("@@ -3,99 +4,1 @@"), HunkStart(3, 4))

    def test_header_shape_is_found_anywhere_in_line(self):
        self.assertEqual(parse_hunk_header("@@ x @@ -4,2 +9,2 @@"), HunkStart(4, 9))

    def test_malformed_header_is_no_match(self):
        self.assertIsNone(parse_hunk_header("@@ garbage @@"))
        self.assertIsNone(parse_hunk_header("@@ -a,1 +2 @@"))
        self.assertIsNone(parse_hunk_header(" context line"))


class TestClassifyPatchLines(unittest.TestCase):
    def test_basic_hunk(self):
        result = classify_patch_lines("@@ -1,2 +1,3 @@\n-old line\n+new line\n context")
        self.assertEqual(
            result.lines,
            [
                LineRecord(kind=KIND_REMOVE, code="old line", old_line=1),
                LineRecord(kind=KIND_ADD, code="new line", new_line=1),
                LineRecord(kind=KIND_CONTEXT, code="context", old_line=2, new_line=2),
            ],
        )
        self.assertEqual(result.code_text, "old line\nnew line\ncontext")

    def test_multiple_hunks_reset_counters(self):
        patch = "\n".join(
            [
                "@@ -1,1 +1,1 @@",
                " a",
                "@@ -20,2 +25,2 @@",
                " b",
                "+c",
                "-d",
            ]
        )
        result = classify_patch_lines(patch)
        self.assertEqual([(line.old_line, line.new_line) for line in result.lines], [(1, 1), (20, 25), (None, 26), (21, None)])

    def test_file_headers_are_discarded(self):
        result = classify_patch_lines("--- a/src/a.py\n+++ b/src/a.py\n@@ -1 +1 @@\n-x\n+y")
        self.assertEqual(result.kinds, [KIND_REMOVE, KIND_ADD])

    def test_only_file_headers_yield_no_lines(self):
        self.assertEqual(len(classify_patch_lines("+++ a\n--- b")), 0)

    def test_context_before_any_hunk_has_no_numbers(self):
        result = classify_patch_lines("preamble\n@@ -5 +6 @@\n line")
        self.assertEqual(result.lines[0], LineRecord(kind=KIND_CONTEXT, code="preamble"))
        self.assertEqual(result.lines[1], LineRecord(kind=KIND_CONTEXT, code="line", old_line=5, new_line=6))

    def test_context_strips_only_one_leading_space(self):
        result = classify_patch_lines("@@ -1 +1 @@\n     indented")
        self.assertEqual(result.code_lines, ["    indented"])

    def test_malformed_header_keeps_previous_counters(self):
        patch = "@@ -10,2 +20,2 @@\n first\n@@ garbage @@\n second"
        result = classify_patch_lines(patch)
        self.assertEqual(result.lines[1], LineRecord(kind=KIND_CONTEXT, code="second", old_line=11, new_line=21))

    def test_malformed_header_before_any_hunk_leaves_numbers_empty(self):
        result = classify_patch_lines("@@ garbage @@\n context")
        self.assertEqual(result.lines, [LineRecord(kind=KIND_CONTEXT, code="context")])

    def test_additions_only(self):
        result = classify_patch_lines("@@ -0,0 +1,3 @@\n+a\n+b\n+c")
        self.assertEqual([line.new_line for line in result.lines], [1, 2, 3])
        self.assertTrue(all(line.old_line is None for line in result.lines))

    def test_removals_only(self):
        result = classify_patch_lines("@@ -1,2 +0,0 @@\n-a\n-b")
        self.assertEqual([line.old_line for line in result.lines], [1, 2])
        self.assertTrue(all(line.new_line is None for line in result.lines))

    def test_input_is_not_mutated_and_must_be_text(self):
        patch = "@@ -1 +1 @@\n-x"
        classify_patch_lines(patch)
        self.assertEqual(patch, "@@ -1 +1 @@\n-x")
        with self.assertRaises(TypeError):
            classify_patch_lines(None)


if __name__ == "__main__":
    unittest.main()
