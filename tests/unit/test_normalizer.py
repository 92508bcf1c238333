import unittest

from calculus_calculator.engine.normalizer import normalize_expression


class NormalizerTestCase(unittest.TestCase):
    def test_natural_log_maps_to_log(self) -> None:
        self.assertEqual(normalize_expression("ln(x)"), "log(x)")

    def test_plain_log_maps_to_log10(self) -> None:
        self.assertEqual(normalize_expression("log(x)"), "log10(x)")

    def test_mixed_logs_are_disambiguated_in_one_pass(self) -> None:
        self.assertEqual(normalize_expression("ln(x)+log(x)"), "log(x)+log10(x)")
        self.assertEqual(normalize_expression("ln(log(x))"), "log(log10(x))")

    def test_exponential_prefix_is_closed(self) -> None:
        self.assertEqual(normalize_expression("e^x"), "exp(x)")
        self.assertEqual(normalize_expression("e^(2*x)+1"), "exp(2*x)+1")
        self.assertEqual(normalize_expression("3*e^-x"), "3*exp(-x)")
        self.assertEqual(normalize_expression("e^sin(x)"), "exp(sin(x))")

    def test_square_root_and_constants(self) -> None:
        self.assertEqual(normalize_expression("√(x+1)"), "sqrt(x+1)")
        self.assertEqual(normalize_expression("√x"), "sqrt(x)")
        self.assertEqual(normalize_expression("2*π"), "2*pi")
        self.assertEqual(normalize_expression("∞"), "Infinity")

    def test_nested_prefix_operators_are_rewritten(self) -> None:
        self.assertEqual(normalize_expression("e^(e^x)"), "exp(exp(x))")
        self.assertEqual(normalize_expression("√(√x)"), "sqrt(sqrt(x))")
        self.assertEqual(normalize_expression("√√x"), "sqrt(sqrt(x))")
        self.assertEqual(normalize_expression("e^(1+√x)"), "exp(1+sqrt(x))")

    def test_exponent_chain_is_right_associative(self) -> None:
        self.assertEqual(normalize_expression("e^x^2"), "exp(x^2)")
        self.assertEqual(normalize_expression("e^x^2+1"), "exp(x^2)+1")
        self.assertEqual(normalize_expression("e^e^x"), "exp(exp(x))")
        self.assertEqual(normalize_expression("2*e^(x)^3"), "2*exp((x)^3)")

    def test_canonical_tokens_are_left_alone(self) -> None:
        for text in ("x^2", "log10(x)", "exp(x)", "sqrt(2)", "sec(x)^2", "tan(x)^2"):
            with self.subTest(text=text):
                self.assertEqual(normalize_expression(text), text)

    def test_normalize_is_idempotent(self) -> None:
        samples = [
            "x^2", "log(x)", "e^x", "√(x)", "π*x", "∞", "sin(x)+cos(x)", "e^(x^2)*√x", "log(x^2)+7",
            "e^(e^x)", "√(√x)", "e^x^2", "√√x", "e^e^x",
        ]
        for text in samples:
            with self.subTest(text=text):
                once = normalize_expression(text)
                self.assertEqual(normalize_expression(once), once)

    def test_natural_log_reads_as_base_ten_on_second_pass(self) -> None:
        once = normalize_expression("ln(x)")
        self.assertEqual(once, "log(x)")
        self.assertEqual(normalize_expression(once), "log10(x)")


if __name__ == "__main__":
    unittest.main()
