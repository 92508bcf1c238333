import unittest

from calculus_calculator.engine.explain import build_steps, describe_operation
from calculus_calculator.engine.models import Operation


class ExplanationTestCase(unittest.TestCase):
    def test_derivative_steps(self) -> None:
        steps = build_steps(Operation.DERIVATIVE, "x^3", "x")
        self.assertEqual(
            steps,
            (
                "Given function: f(x) = x^3",
                "Find: f'(x) = d/dx[x^3]",
                "Apply differentiation rules...",
                "Result: f'(x) = 3*x^2",
            ),
        )

    def test_integral_steps(self) -> None:
        steps = build_steps(Operation.INTEGRAL, "cos(t)", "t")
        self.assertEqual(len(steps), 4)
        self.assertEqual(steps[1], "Find: ∫f(t)dt = ∫cos(t)dt")
        self.assertEqual(steps[3], "Result: ∫cos(t)dt = sin(t) + C")

    def test_unresolved_input_still_has_four_steps(self) -> None:
        steps = build_steps("derivative", "sin(x)*cos(x)", "x")  # type: ignore[arg-type]
        self.assertEqual(len(steps), 4)
        self.assertEqual(steps[3], "Result: f'(x) = d/dx(sin(x)*cos(x))")

    def test_describe_operation(self) -> None:
        self.assertIn("with respect to t", describe_operation(Operation.DERIVATIVE, "t"))
        self.assertIn("(+C)", describe_operation(Operation.INTEGRAL, "x"))


if __name__ == "__main__":
    unittest.main()
