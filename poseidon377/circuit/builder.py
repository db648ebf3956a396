"""Rank-1 constraint builder.

A minimal compile/solve constraint system over a prime modulus. Variables
are linear combinations of wires; wire 0 is the constant ONE. Every
multiplication of two non-constant combinations allocates an output wire
and records a constraint a * b = c. Additions, subtractions and scaling by
constants stay linear and cost nothing.

Besides quadratic constraints the builder records:
- range checks (value < 2^bits), checked at satisfaction time;
- hints: out-of-circuit functions that compute auxiliary witness values.
  Hint outputs are unconstrained until the caller constrains them.

Witness generation replays the recorded program (multiplications and hints
in allocation order) on a named input assignment.

Example:
    cs = ConstraintSystem(P)
    x = cs.secret_input("x")
    y = cs.public_input("y")
    cs.assert_equal(cs.mul(x, x), y)
    w = cs.solve({"x": 3, "y": 9})
    assert cs.is_satisfied(w)
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from poseidon377.errors import UnsatisfiedConstraint

ONE_WIRE = 0

Hint = Callable[[int, List[int]], List[int]]
"""Hint function: (modulus, input values) -> output values."""


class Variable:
    """Linear combination sum(coeff * wire) over the builder's modulus."""

    __slots__ = ("terms",)

    def __init__(self, terms: Dict[int, int]):
        self.terms = terms

    @property
    def is_constant(self) -> bool:
        return all(w == ONE_WIRE for w in self.terms)

    @property
    def constant_value(self) -> int:
        """Value of a constant combination (0 for the empty combination)."""
        assert self.is_constant
        return self.terms.get(ONE_WIRE, 0)

    def __repr__(self) -> str:
        return f"Variable({self.terms})"


Operand = Union[Variable, int]


@dataclass
class Witness:
    """Solved wire values, indexed by wire number."""
    values: List[int]
    inputs: Dict[str, int]


@dataclass
class _Constraint:
    a: Variable
    b: Variable
    c: Variable


class ConstraintSystem:
    """Constraint builder and witness solver.

    Args:
        modulus: Prime modulus of the native field
    """

    def __init__(self, modulus: int):
        self.modulus = modulus
        self._n_wires = 1
        self._inputs: Dict[str, int] = {}
        self._public: List[str] = []
        self._constraints: List[_Constraint] = []
        self._range_checks: List[Tuple[Variable, int]] = []
        # ("mul", out_wire, a, b) | ("hint", fn, inputs, out_wires)
        self._program: List[tuple] = []

    # --- Allocation ---

    def _new_wire(self) -> int:
        wire = self._n_wires
        self._n_wires += 1
        return wire

    def _input(self, name: str) -> Variable:
        if name in self._inputs:
            raise ValueError(f"duplicate input name: {name}")
        wire = self._new_wire()
        self._inputs[name] = wire
        return Variable({wire: 1})

    def public_input(self, name: str) -> Variable:
        self._public.append(name)
        return self._input(name)

    def secret_input(self, name: str) -> Variable:
        return self._input(name)

    def constant(self, value: int) -> Variable:
        value %= self.modulus
        return Variable({ONE_WIRE: value} if value else {})

    def _lift(self, v: Operand) -> Variable:
        return v if isinstance(v, Variable) else self.constant(v)

    # --- Linear ---

    def add(self, a: Operand, b: Operand) -> Variable:
        a, b = self._lift(a), self._lift(b)
        terms = dict(a.terms)
        for wire, coeff in b.terms.items():
            total = (terms.get(wire, 0) + coeff) % self.modulus
            if total:
                terms[wire] = total
            else:
                terms.pop(wire, None)
        return Variable(terms)

    def scale(self, a: Operand, k: int) -> Variable:
        a = self._lift(a)
        k %= self.modulus
        if k == 0:
            return Variable({})
        return Variable({w: (c * k) % self.modulus for w, c in a.terms.items()})

    def sub(self, a: Operand, b: Operand) -> Variable:
        return self.add(a, self.scale(b, -1))

    # --- Quadratic ---

    def mul(self, a: Operand, b: Operand) -> Variable:
        """Product; allocates a wire and a constraint only if neither side is constant."""
        a, b = self._lift(a), self._lift(b)
        if a.is_constant:
            return self.scale(b, a.constant_value)
        if b.is_constant:
            return self.scale(a, b.constant_value)
        out = self._new_wire()
        result = Variable({out: 1})
        self._constraints.append(_Constraint(a, b, result))
        self._program.append(("mul", out, a, b))
        return result

    def assert_equal(self, a: Operand, b: Operand) -> None:
        diff = self.sub(a, b)
        if not diff.terms:
            return
        self._constraints.append(_Constraint(diff, self.constant(1), Variable({})))

    def assert_range(self, a: Operand, bits: int) -> None:
        """Require 0 <= a < 2^bits (a read as an integer in [0, modulus))."""
        a = self._lift(a)
        if a.is_constant:
            if a.constant_value >> bits:
                raise ValueError(f"constant {a.constant_value} does not fit in {bits} bits")
            return
        self._range_checks.append((a, bits))

    def hint(self, fn: Hint, inputs: Sequence[Operand], n_out: int) -> List[Variable]:
        """Allocate n_out wires computed by fn at solve time."""
        lifted = [self._lift(v) for v in inputs]
        outs = [self._new_wire() for _ in range(n_out)]
        self._program.append(("hint", fn, lifted, outs))
        return [Variable({w: 1}) for w in outs]

    # --- Solving ---

    @property
    def num_constraints(self) -> int:
        return len(self._constraints)

    @property
    def num_range_checks(self) -> int:
        return len(self._range_checks)

    @property
    def num_wires(self) -> int:
        return self._n_wires

    @property
    def input_names(self) -> List[str]:
        return list(self._inputs)

    @property
    def public_inputs(self) -> List[str]:
        return list(self._public)

    def _eval(self, v: Variable, values: List[Optional[int]]) -> int:
        total = 0
        for wire, coeff in v.terms.items():
            total += coeff * values[wire]
        return total % self.modulus

    def solve(self, assignment: Mapping[str, int]) -> Witness:
        """Compute every wire from the named inputs.

        Raises:
            KeyError: If an input has no assigned value
        """
        missing = [name for name in self._inputs if name not in assignment]
        if missing:
            raise KeyError(f"unassigned inputs: {', '.join(missing)}")

        values: List[Optional[int]] = [None] * self._n_wires
        values[ONE_WIRE] = 1
        for name, wire in self._inputs.items():
            values[wire] = int(assignment[name]) % self.modulus

        for step in self._program:
            if step[0] == "mul":
                _, out, a, b = step
                values[out] = (self._eval(a, values) * self._eval(b, values)) % self.modulus
            else:
                _, fn, ins, outs = step
                results = fn(self.modulus, [self._eval(v, values) for v in ins])
                if len(results) != len(outs):
                    raise ValueError(f"hint returned {len(results)} values, expected {len(outs)}")
                for wire, r in zip(outs, results):
                    values[wire] = int(r) % self.modulus

        return Witness(values=values, inputs={n: values[w] for n, w in self._inputs.items()})

    def value(self, v: Operand, witness: Witness) -> int:
        return self._eval(self._lift(v), witness.values)

    def check(self, witness: Witness) -> None:
        """Raise UnsatisfiedConstraint on the first violated constraint or range check."""
        for i, con in enumerate(self._constraints):
            a = self._eval(con.a, witness.values)
            b = self._eval(con.b, witness.values)
            c = self._eval(con.c, witness.values)
            if (a * b - c) % self.modulus != 0:
                raise UnsatisfiedConstraint(f"constraint {i} not satisfied: {a} * {b} != {c}")
        for i, (v, bits) in enumerate(self._range_checks):
            val = self._eval(v, witness.values)
            if val >> bits:
                raise UnsatisfiedConstraint(f"range check {i} not satisfied: {val} >= 2^{bits}")

    def is_satisfied(self, witness: Witness) -> bool:
        try:
            self.check(witness)
        except UnsatisfiedConstraint:
            return False
        return True
