import io
import os
import shutil
import sys
import tempfile
import unittest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(os.path.abspath(__file__)), os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from components.config import StoreConfig
from components.record import Record
from components.record_store import RecordStore
from console import Console, main, parse_args


class ConsoleTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp(prefix="record_trie_console_")
        self.path = os.path.join(self.tmp_dir, "records.csv")
        self.store = RecordStore(StoreConfig(path=self.path))
        self.store.add_many([
            Record("12A", "Ada", "Math", 19.5),
            Record("12B", "Alan", "CS", 18.0),
            Record("13C", "Grace", "CS", 17.25),
        ])

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def run_console(self, *lines):
        out = io.StringIO()
        Console(self.store, stdin=io.StringIO("\n".join(lines) + "\n"), stdout=out).run()
        return out.getvalue()


class TestAdd(ConsoleTestCase):
    def test_add(self):
        out = self.run_console("1", "20X", "Linus", "CS", "15.5", "0")
        self.assertIn("Record added successfully.", out)
        self.assertEqual(self.store.get("20X"), Record("20X", "Linus", "CS", 15.5))
        self.assertTrue(self.store.index.search("20X"))

    def test_add_rejections(self):
        out = self.run_console("1", "", "1", "12A", "1", "21Y", "", "1", "22Z", "N", "C", "abc", "0")
        self.assertIn("Identifier cannot be empty.", out)
        self.assertIn("A record with identifier 12A already exists.", out)
        self.assertIn("Name cannot be empty.", out)
        self.assertIn("Invalid score. Please enter a numeric value.", out)
        self.assertEqual(len(self.store), 3)


class TestSearch(ConsoleTestCase):
    def test_exact(self):
        out = self.run_console("2", "13C", "0")
        self.assertIn("Name:       Grace", out)

    def test_prefix_choice(self):
        out = self.run_console("2", "12", "2", "0")
        self.assertIn("Did you mean one of the following?", out)
        self.assertIn("1. 12A", out)
        self.assertIn("2. 12B", out)
        self.assertIn("Name:       Alan", out)

    def test_prefix_cancel_and_invalid(self):
        out = self.run_console("2", "12", "0", "2", "12", "9", "2", "12", "x", "0")
        self.assertIn("Search cancelled.", out)
        self.assertEqual(out.count("Invalid selection."), 2)

    def test_missing(self):
        out = self.run_console("2", "99", "0")
        self.assertIn("Record with identifier 99 does not exist.", out)


class TestUpdateRemove(ConsoleTestCase):
    def test_update_keeps_blanks(self):
        out = self.run_console("3", "12A", "", "Logic", "", "0")
        self.assertIn("Record updated successfully.", out)
        self.assertEqual(self.store.get("12A"), Record("12A", "Ada", "Logic", 19.5))

    def test_update_invalid_score_keeps_current(self):
        out = self.run_console("3", "13", "1", "Rear Admiral", "", "oops", "0")
        self.assertIn("Invalid score. Keeping current value.", out)
        self.assertEqual(self.store.get("13C"), Record("13C", "Rear Admiral", "CS", 17.25))

    def test_remove_via_prefix(self):
        out = self.run_console("4", "12", "1", "0")
        self.assertIn("Record removed successfully.", out)
        self.assertNotIn("12A", self.store)
        self.assertEqual(self.store.suggest("12"), ["12B"])

    def test_remove_cancelled(self):
        out = self.run_console("4", "1", "0", "0")
        self.assertIn("Removal cancelled.", out)
        self.assertEqual(len(self.store), 3)


class TestUnwritableInput(ConsoleTestCase):
    def test_add_rejects_comment_marker_and_delimiter(self):
        out = self.run_console("1", "#7", "Hash", "X", "1",
                               "1", "8", "Smith; Jr", "X", "1", "0")
        self.assertIn("Record not added: identifier must not start with '#'.", out)
        self.assertIn("Record not added: name must not contain ';'.", out)
        self.assertNotIn("Record added successfully.", out)
        reloaded = RecordStore(StoreConfig(path=self.path))
        self.assertEqual(sorted(reloaded.records), ["12A", "12B", "13C"])

    def test_update_rejects_delimiter(self):
        out = self.run_console("3", "12A", "", "Math; Logic", "", "0")
        self.assertIn("Record not updated: category must not contain ';'.", out)
        self.assertEqual(self.store.get("12A").category, "Math")


class TestSaveFailure(ConsoleTestCase):
    def test_add_warns_when_file_not_written(self):
        self.store.config = StoreConfig(path=self.tmp_dir)
        with self.assertLogs("components.record_store", level="ERROR"):
            out = self.run_console("1", "20X", "Linus", "CS", "15.5", "0")
        self.assertNotIn("Record added successfully.", out)
        self.assertIn(f"Warning: changes could not be written to {self.tmp_dir}; "
                      "they are kept for this session only.", out)
        self.assertIn(f"Warning: changes could not be written to {self.tmp_dir}.", out)
        self.assertIn("20X", self.store)


class TestMenu(ConsoleTestCase):
    def test_list_sorted(self):
        out = self.run_console("5", "0")
        self.assertIn("--- Record List (sorted by identifier) ---", out)
        self.assertLess(out.index("12A"), out.index("12B"))
        self.assertLess(out.index("12B"), out.index("13C"))

    def test_list_empty(self):
        for identifier in list(self.store.records):
            self.store.remove(identifier)
        self.assertIn("No records registered.", self.run_console("5", "0"))

    def test_bad_choices(self):
        out = self.run_console("abc", "7", "0")
        self.assertIn("Invalid input. Please enter a number from 0 to 5.", out)
        self.assertIn("Unknown choice. Please select between 0 and 5.", out)
        self.assertTrue(out.rstrip().endswith("Goodbye!"))

    def test_end_of_input_quits_and_saves(self):
        os.remove(self.path)
        out = io.StringIO()
        Console(self.store, stdin=io.StringIO(""), stdout=out).run()
        self.assertIn("Goodbye!", out.getvalue())
        self.assertTrue(os.path.exists(self.path))


class TestEntryPoint(unittest.TestCase):
    def test_parse_args_defaults(self):
        args = parse_args([])
        self.assertEqual(args.data, "records.csv")
        self.assertEqual(args.seed, 0)

    def test_main_seeds_empty_store(self):
        tmp_dir = tempfile.mkdtemp(prefix="record_trie_main_")
        self.addCleanup(shutil.rmtree, tmp_dir, True)
        path = os.path.join(tmp_dir, "records.csv")
        old_stdin, old_stdout = sys.stdin, sys.stdout
        sys.stdin, sys.stdout = io.StringIO("0\n"), io.StringIO()
        try:
            self.assertEqual(main(["--data", path, "--seed", "5"]), 0)
        finally:
            sys.stdin, sys.stdout = old_stdin, old_stdout
        self.assertEqual(len(RecordStore(StoreConfig(path=path))), 5)


if __name__ == "__main__":
    unittest.main()
