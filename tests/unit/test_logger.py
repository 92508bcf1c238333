import json
import logging
import unittest

from calculus_calculator.utils.logger import JsonFormatter


class JsonFormatterTestCase(unittest.TestCase):
    def test_formats_message_and_extra_fields(self) -> None:
        record = logging.makeLogRecord(
            {
                "name": "calculus_calculator.test",
                "levelname": "INFO",
                "msg": "calculated %s",
                "args": ("x^3",),
                "operation": "derivative",
            }
        )

        payload = json.loads(JsonFormatter().format(record))

        self.assertEqual(payload["message"], "calculated x^3")
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "calculus_calculator.test")
        self.assertEqual(payload["operation"], "derivative")
        self.assertTrue(payload["timestamp"].endswith("Z"))
        self.assertNotIn("msg", payload)


if __name__ == "__main__":
    unittest.main()
