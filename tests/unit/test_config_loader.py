import tempfile
import unittest
from pathlib import Path

from calculus_calculator.utils.config_loader import CalculatorConfig, ConfigError, load_calculator_config

REPO_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "calculator.yml"


class ConfigLoaderTestCase(unittest.TestCase):
    def _write(self, tmpdir: str, content: str) -> str:
        path = Path(tmpdir) / "calculator.yml"
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_repository_config_matches_defaults(self) -> None:
        config = load_calculator_config(str(REPO_CONFIG))
        self.assertEqual(config.engine.subdivisions, 1000)
        self.assertEqual(config.engine.decimal_places, 6)
        self.assertEqual(config.engine.default_variable, "x")
        self.assertIn("__", config.security.blocked_patterns)
        self.assertEqual(config.api.max_sessions, 1000)
        self.assertEqual(config.api.session_idle_seconds, 1800.0)

    def test_partial_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_calculator_config(self._write(tmpdir, "engine:\n  decimal_places: 3\n"))
        self.assertEqual(config.engine.decimal_places, 3)
        self.assertEqual(config.engine.subdivisions, CalculatorConfig().engine.subdivisions)
        self.assertEqual(config.history.max_entries, 200)

    def test_null_deadline_disables_it(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_calculator_config(self._write(tmpdir, "engine:\n  deadline_seconds: null\n"))
        self.assertIsNone(config.engine.deadline_seconds)

    def test_odd_subdivisions_are_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ConfigError):
                load_calculator_config(self._write(tmpdir, "engine:\n  subdivisions: 999\n"))

    def test_invalid_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ConfigError):
                load_calculator_config(str(Path(tmpdir) / "missing.yml"))
            with self.assertRaises(ConfigError):
                load_calculator_config(self._write(tmpdir, "- a\n- b\n"))
            with self.assertRaises(ConfigError):
                load_calculator_config(self._write(tmpdir, "engine: [1, 2]\n"))


if __name__ == "__main__":
    unittest.main()
