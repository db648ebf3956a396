"""Arithmetic contexts for the permutation.

ArithmeticContext is the one interface the permutation is written against.
The same round schedule runs on plain field elements, on native constraint
variables and on emulated limb vectors, depending on the context passed in.

Example:
    def square_plus_one(ctx: ArithmeticContext, x):
        return ctx.add(ctx.mul(x, x), ctx.constant(1))

    # Concrete: returns an FF scalar
    square_plus_one(ConcreteContext(), FF(3))

    # Symbolic: returns a Variable and records one constraint
    cs = ConstraintSystem(P)
    square_plus_one(CircuitContext(cs), cs.secret_input("x"))
"""

from abc import ABC, abstractmethod
from typing import Any

from poseidon377.circuit.builder import ConstraintSystem, Variable
from poseidon377.circuit.emulated import EmulatedElement, EmulatedField
from poseidon377.primitives.field import FF, P, to_ff

Element = Any


class ArithmeticContext(ABC):
    """Field operations over some element representation."""

    @abstractmethod
    def add(self, a: Element, b: Element) -> Element:
        pass

    @abstractmethod
    def mul(self, a: Element, b: Element) -> Element:
        pass

    @abstractmethod
    def constant(self, value) -> Element:
        """Lift a field constant (int or FF) into this context."""
        pass

    @abstractmethod
    def assert_equal(self, a: Element, b: Element) -> None:
        pass

    def zero(self) -> Element:
        return self.constant(0)

    def reduce(self, a: Element) -> Element:
        """Canonical form of a. Identity unless elements carry slack."""
        return a

    def coerce(self, value) -> Element:
        """Accept caller input: ints become constants, native elements pass through."""
        if isinstance(value, (int, FF)):
            return self.constant(value)
        return value


class ConcreteContext(ArithmeticContext):
    """Plain modular arithmetic on FF scalars."""

    def add(self, a: FF, b: FF) -> FF:
        return a + b

    def mul(self, a: FF, b: FF) -> FF:
        return a * b

    def constant(self, value) -> FF:
        return to_ff(value)

    def assert_equal(self, a: FF, b: FF) -> None:
        # Concrete values carry no constraints.
        pass

    def coerce(self, value) -> FF:
        return to_ff(value)


class CircuitContext(ArithmeticContext):
    """Native constraint variables over modulus P.

    Args:
        builder: ConstraintSystem whose modulus is P
    """

    def __init__(self, builder: ConstraintSystem):
        if builder.modulus != P:
            raise ValueError(f"circuit builder modulus must be P, got {builder.modulus}")
        self.builder = builder

    def add(self, a: Variable, b: Variable) -> Variable:
        return self.builder.add(a, b)

    def mul(self, a: Variable, b: Variable) -> Variable:
        return self.builder.mul(a, b)

    def constant(self, value) -> Variable:
        return self.builder.constant(int(value))

    def assert_equal(self, a: Variable, b: Variable) -> None:
        self.builder.assert_equal(a, b)


class EmulatedContext(ArithmeticContext):
    """P-field limb vectors inside a host-field constraint system.

    Args:
        field: EmulatedField gadget (usually over the BW6-761 scalar field)
    """

    def __init__(self, field: EmulatedField):
        if field.modulus != P:
            raise ValueError(f"emulated modulus must be P, got {field.modulus}")
        self.field = field

    def add(self, a: EmulatedElement, b: EmulatedElement) -> EmulatedElement:
        return self.field.add(a, b)

    def mul(self, a: EmulatedElement, b: EmulatedElement) -> EmulatedElement:
        return self.field.mul(a, b)

    def constant(self, value) -> EmulatedElement:
        return self.field.constant(int(value))

    def assert_equal(self, a: EmulatedElement, b: EmulatedElement) -> None:
        self.field.assert_equal(a, b)

    def reduce(self, a: EmulatedElement) -> EmulatedElement:
        return self.field.reduce(a)
