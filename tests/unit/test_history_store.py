import json
import tempfile
import unittest
from pathlib import Path

from calculus_calculator.engine.errors import HistoryEntryNotFoundError
from calculus_calculator.engine.models import CalculationResult, Operation, ResultMethod
from calculus_calculator.session.history import HistoryEntry, InMemoryHistoryStore, JsonHistoryStore


def _derivative(expression: str = "x^3", result: str = "3*x^2") -> CalculationResult:
    return CalculationResult(
        operation=Operation.DERIVATIVE,
        input_expression=expression,
        variable="x",
        result_expression=result,
        method=ResultMethod.EXTERNAL,
    )


def _definite() -> CalculationResult:
    return CalculationResult(
        operation=Operation.INTEGRAL,
        input_expression="x^2",
        variable="x",
        result_expression="0.333333",
        is_numeric=True,
        bounds=("0", "1"),
        method=ResultMethod.SIMPSON,
    )


class InMemoryHistoryStoreTestCase(unittest.TestCase):
    def test_most_recent_first_with_increasing_ids(self) -> None:
        store = InMemoryHistoryStore()
        first = store.record(_derivative("x^2", "2*x"))
        second = store.record(_derivative())

        entries = store.list_recent()
        self.assertEqual([e.id for e in entries], [second.id, first.id])
        self.assertGreater(second.id, first.id)
        self.assertEqual(store.list_recent(1), [second])

    def test_max_entries_drops_oldest(self) -> None:
        store = InMemoryHistoryStore(max_entries=2)
        oldest = store.record(_derivative("x", "1"))
        store.record(_derivative("x^2", "2*x"))
        store.record(_derivative())

        self.assertEqual(len(store), 2)
        with self.assertRaises(HistoryEntryNotFoundError):
            store.get(oldest.id)

    def test_entry_keeps_bounds_and_display_result(self) -> None:
        entry = InMemoryHistoryStore().record(_definite())
        self.assertEqual(entry.operation, "integral")
        self.assertEqual(entry.result, "0.333333 (from 0 to 1)")
        self.assertEqual((entry.lower, entry.upper), ("0", "1"))

    def test_clear(self) -> None:
        store = InMemoryHistoryStore()
        store.record(_derivative())
        store.clear()
        self.assertEqual(store.list_recent(), [])


class JsonHistoryStoreTestCase(unittest.TestCase):
    def test_history_survives_reopen(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = "{}/nested/history.json".format(tmpdir)
            store = JsonHistoryStore(path)
            first = store.record(_derivative())
            second = store.record(_definite())

            reopened = JsonHistoryStore(path)
            entries = reopened.list_recent()

        self.assertEqual([e.id for e in entries], [second.id, first.id])
        self.assertEqual(entries[1], first)
        self.assertEqual(entries[0].lower, "0")

    def test_clear_persists(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "history.json"
            store = JsonHistoryStore(str(path))
            store.record(_derivative())
            store.clear()

            self.assertEqual(json.loads(path.read_text(encoding="utf-8")), [])
            self.assertEqual(len(JsonHistoryStore(str(path))), 0)

    def test_unreadable_file_starts_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "history.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertLogs("calculus_calculator.session.history", level="WARNING"):
                store = JsonHistoryStore(str(path))
        self.assertEqual(len(store), 0)

    def test_malformed_entries_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "history.json"
            valid = HistoryEntry(
                id=5, expression="x", operation="derivative", result="1", variable="x", timestamp="t"
            ).to_dict()
            path.write_text(json.dumps([{"expression": "no id"}, valid]), encoding="utf-8")
            with self.assertLogs("calculus_calculator.session.history", level="WARNING"):
                store = JsonHistoryStore(str(path))
        self.assertEqual([e.id for e in store.list_recent()], [5])


if __name__ == "__main__":
    unittest.main()
