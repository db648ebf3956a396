"""Tests for the rank-1 constraint builder."""

import pytest

from poseidon377.circuit.builder import ONE_WIRE, ConstraintSystem
from poseidon377.errors import UnsatisfiedConstraint
from poseidon377.primitives.field import P


@pytest.fixture
def cs():
    return ConstraintSystem(P)


class TestLinear:
    """Constant folding and linear combinations."""

    def test_constants_fold(self, cs) -> None:
        a = cs.constant(3)
        b = cs.constant(4)
        assert cs.mul(a, b).constant_value == 12
        assert cs.add(a, b).terms == {ONE_WIRE: 7}
        assert cs.num_constraints == 0

    def test_mul_by_constant_is_linear(self, cs) -> None:
        x = cs.secret_input("x")
        y = cs.mul(x, 5)
        assert cs.num_constraints == 0
        w = cs.solve({"x": 2})
        assert cs.value(y, w) == 10

    def test_cancellation(self, cs) -> None:
        x = cs.secret_input("x")
        assert cs.sub(x, x).terms == {}
        cs.assert_equal(x, x)
        assert cs.num_constraints == 0

    def test_negative_constant(self, cs) -> None:
        assert cs.constant(-1).constant_value == P - 1

    def test_scale_by_zero(self, cs) -> None:
        x = cs.secret_input("x")
        assert cs.scale(x, P).terms == {}


class TestQuadratic:
    """Multiplication constraints and solving."""

    def test_square(self, cs) -> None:
        x = cs.secret_input("x")
        y = cs.public_input("y")
        cs.assert_equal(cs.mul(x, x), y)
        assert cs.num_constraints == 2
        assert cs.public_inputs == ["y"]
        assert cs.is_satisfied(cs.solve({"x": 3, "y": 9}))
        assert not cs.is_satisfied(cs.solve({"x": 3, "y": 10}))

    def test_check_raises(self, cs) -> None:
        x = cs.secret_input("x")
        cs.assert_equal(x, 1)
        with pytest.raises(UnsatisfiedConstraint):
            cs.check(cs.solve({"x": 2}))

    def test_chain(self, cs) -> None:
        x = cs.secret_input("x")
        acc = x
        for _ in range(4):
            acc = cs.mul(acc, acc)
        w = cs.solve({"x": 2})
        assert cs.value(acc, w) == pow(2, 16, P)
        assert cs.num_constraints == 4

    def test_inputs_reduced(self, cs) -> None:
        x = cs.secret_input("x")
        w = cs.solve({"x": P + 4})
        assert cs.value(x, w) == 4


class TestInputs:
    """Input naming and assignment."""

    def test_duplicate_name(self, cs) -> None:
        cs.secret_input("x")
        with pytest.raises(ValueError):
            cs.public_input("x")

    def test_missing_assignment(self, cs) -> None:
        cs.secret_input("x")
        cs.secret_input("y")
        with pytest.raises(KeyError, match="y"):
            cs.solve({"x": 1})


class TestRangeAndHints:
    """Range checks and hint wires."""

    def test_range_check(self, cs) -> None:
        x = cs.secret_input("x")
        cs.assert_range(x, 8)
        assert cs.num_range_checks == 1
        assert cs.is_satisfied(cs.solve({"x": 255}))
        assert not cs.is_satisfied(cs.solve({"x": 256}))

    def test_range_check_negative_fails(self, cs) -> None:
        x = cs.secret_input("x")
        cs.assert_range(x, 64)
        assert not cs.is_satisfied(cs.solve({"x": -1}))

    def test_constant_range_check(self, cs) -> None:
        cs.assert_range(cs.constant(7), 3)
        with pytest.raises(ValueError):
            cs.assert_range(cs.constant(8), 3)

    def test_hint(self, cs) -> None:
        """Hint computes x / 2; a linear constraint pins it down."""
        x = cs.secret_input("x")

        def halve(modulus, ins):
            return [ins[0] * pow(2, -1, modulus) % modulus]

        (h,) = cs.hint(halve, [x], 1)
        cs.assert_equal(cs.add(h, h), x)
        w = cs.solve({"x": 10})
        assert cs.value(h, w) == 5
        assert cs.is_satisfied(w)

    def test_hint_wrong_arity(self, cs) -> None:
        x = cs.secret_input("x")
        cs.hint(lambda m, ins: [1, 2], [x], 1)
        with pytest.raises(ValueError):
            cs.solve({"x": 1})
