import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

import textgen
from markovmodel import MarkovModel


class TestTextgen(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".txt")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("gagggagaggcgagaaa")

    def tearDown(self):
        os.remove(self.path)

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            textgen.main(argv)
        return out.getvalue(), err.getvalue()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def test_load_text(self):
        self.assertEqual(textgen.load_text(self.path), "gagggagaggcgagaaa")

    def test_strip_non_ascii(self):
        self.assertEqual(textgen.strip_non_ascii("café"), "caf")

    def test_parse_args_defaults(self):
        args = textgen.parse_args([])
        self.assertEqual(args.input, "-")
        self.assertEqual(args.order, 2)
        self.assertEqual(args.length, 100)
        self.assertIsNone(args.kgrams)

    def test_generate_text_returns_partial_on_failure(self):
        model = MarkovModel("banana", 2)
        err = io.StringIO()
        with redirect_stderr(err):
            self.assertEqual(textgen.generate_text(model, "zz", 10), "zz")
        self.assertIn("Warning", err.getvalue())

    # ------------------------------------------------------------------ #
    # Main entry
    # ------------------------------------------------------------------ #

    def test_main_generates(self):
        out, err = self._run(["--order", "2", "--length", "50", "--random-seed", "3", self.path])
        generated = out.strip()
        self.assertEqual(len(generated), 50)
        self.assertTrue(generated.startswith("ga"))
        self.assertIn("MarkovModel initialized (order=2, kgrams=6)", err)

    def test_main_is_reproducible(self):
        argv = ["--length", "40", "--random-seed", "11", "--seed-kgram", "gc", self.path]
        self.assertEqual(self._run(argv)[0], self._run(argv)[0])

    def test_parse_args_keeps_input_before_kgrams(self):
        args = textgen.parse_args([self.path, "--order", "2", "--kgrams", "th", "he"])
        self.assertEqual(args.input, self.path)
        self.assertEqual(args.kgrams, ["th", "he"])

    def test_main_prints_frequencies(self):
        out, _ = self._run([self.path, "--kgrams", "ga", "tt"])
        self.assertIn("'ga'", out)
        self.assertIn("'g':4", out)
        self.assertIn("'tt'", out)

    def test_main_reports_bad_seed_length(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run(["--seed-kgram", "gag", self.path])
        self.assertEqual(ctx.exception.code, 1)

    def test_main_reports_missing_file(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run([self.path + ".missing"])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
