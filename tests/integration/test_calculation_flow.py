import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    TestClient = None

from calculus_calculator.api.server import create_app
from calculus_calculator.main import main
from calculus_calculator.session.history import JsonHistoryStore
from calculus_calculator.utils.config_loader import load_calculator_config

REPO_CONFIG = str(Path(__file__).resolve().parents[2] / "configs" / "calculator.yml")


class CliFlowTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.history_file = str(Path(self._tmpdir.name) / "history.json")

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def _run(self, *args: str):  # noqa: ANN202
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(["--config", REPO_CONFIG, "--history-file", self.history_file, *args])
        return code, json.loads(buffer.getvalue())

    def test_calculate_history_and_replay(self) -> None:
        code, derivative = self._run("--function", "x^3", "--operation", "derivative")
        self.assertEqual(code, 0)
        self.assertEqual(derivative["display_result"], "3*x^2")

        code, integral = self._run("--function", "e^x", "--operation", "integral", "--lower", "0", "--upper", "1")
        self.assertEqual(code, 0)
        self.assertEqual(integral["result_expression"], "1.718282")
        self.assertEqual(integral["method"], "simpson")

        _, history = self._run("--history")
        self.assertEqual([e["expression"] for e in history["entries"]], ["e^x", "x^3"])

        code, replayed = self._run("--replay", str(history["entries"][0]["id"]))
        self.assertEqual(code, 0)
        self.assertEqual(replayed["result_expression"], "1.718282")
        self.assertEqual(replayed["bounds"], ["0", "1"])

        _, cleared = self._run("--clear-history")
        self.assertTrue(cleared["cleared"])
        self.assertEqual(self._run("--history")[1]["entries"], [])

    def test_errors_exit_non_zero(self) -> None:
        code, payload = self._run("--function", "", "--operation", "derivative")
        self.assertEqual(code, 1)
        self.assertEqual(payload["error"], "Please enter a function")

        code, payload = self._run("--replay", "1")
        self.assertEqual(code, 1)
        self.assertIn("not found", payload["error"])

    def test_export_latex(self) -> None:
        tex_path = str(Path(self._tmpdir.name) / "out" / "result.tex")
        code, payload = self._run("--function", "sin(x)", "--operation", "integral", "--export-latex", tex_path)
        self.assertEqual(code, 0)
        self.assertEqual(payload["latex_path"], tex_path)
        self.assertIn("-cos(x) + C", Path(tex_path).read_text(encoding="utf-8"))


@unittest.skipUnless(TestClient is not None, "fastapi test client not available")
class ApiRestartFlowTestCase(unittest.TestCase):
    def test_history_survives_app_restart(self) -> None:
        config = load_calculator_config(REPO_CONFIG)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = str(Path(tmpdir) / "history.json")

            first = TestClient(create_app(config=config, history=JsonHistoryStore(path)))
            created = first.post("/v1/calculate", json={"expression": "t^2", "operation": "derivative", "variable": "t"})
            self.assertEqual(created.status_code, 200)
            self.assertEqual(created.json()["result"], "2*t")

            second = TestClient(create_app(config=config, history=JsonHistoryStore(path)))
            entries = second.get("/v1/history").json()["entries"]
            self.assertEqual(len(entries), 1)
            self.assertEqual(entries[0]["variable"], "t")

            replayed = second.post("/v1/history/{}/replay".format(entries[0]["id"]))
            self.assertEqual(replayed.json()["result"], "2*t")


if __name__ == "__main__":
    unittest.main()
