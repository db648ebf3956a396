"""Non-native field arithmetic over 64-bit limbs.

Represents elements of GF(P) inside a ConstraintSystem whose modulus is a
different (larger) prime, the BW6-761 scalar field by default. An element is
a little-endian vector of NUM_LIMBS limbs, value = sum(limb_i * 2^(64 i)).

Limbs of freshly multiplied or witnessed elements are range-checked to 64
bits. Additions are limb-wise without carrying, so limbs grow; each element
tracks that growth as `overflow` (limbs < 2^(64 + overflow)). Elements whose
overflow would pass MAX_OVERFLOW are reduced first.

Multiplication a * b takes q and r from a hint with a * b = q * P + r and
proves the identity column by column on the limb polynomials with signed,
range-checked carries:

    e_k = sum_{i+j=k} a_i b_j - sum_{i+j=k} q_i p_j - r_k
    e_0 = c_0 2^64,  e_k + c_{k-1} = c_k 2^64,  e_K + c_{K-1} = 0

Every column stays far below the host modulus, so the equations hold over
the integers. The result r is reduced (< 2^256) but not necessarily below P;
reduce() adds the canonical check r + s = P - 1 with s >= 0.
"""

from typing import Dict, List, Optional, Sequence

from poseidon377.circuit.builder import ConstraintSystem, Variable, Witness
from poseidon377.primitives.field import BW6_761_FR, P

NUM_LIMBS = 4
LIMB_BITS = 64
LIMB_MASK = (1 << LIMB_BITS) - 1
MAX_OVERFLOW = 16
CARRY_MARGIN = 6


def split_limbs(value: int, n: int = NUM_LIMBS) -> List[int]:
    """Little-endian 64-bit limbs of a non-negative integer."""
    return [(value >> (LIMB_BITS * i)) & LIMB_MASK for i in range(n)]


def join_limbs(limbs: Sequence[int]) -> int:
    return sum(int(limb) << (LIMB_BITS * i) for i, limb in enumerate(limbs))


class EmulatedElement:
    """Limb vector plus bookkeeping. Create through EmulatedField only.

    Attributes:
        limbs: Builder variables, least significant first
        overflow: Extra bits each limb may carry above 64
        canonical: True once the value is proven to be below P
    """

    __slots__ = ("limbs", "overflow", "canonical")

    def __init__(self, limbs: List[Variable], overflow: int = 0, canonical: bool = False):
        self.limbs = limbs
        self.overflow = overflow
        self.canonical = canonical

    @property
    def is_constant(self) -> bool:
        return all(limb.is_constant for limb in self.limbs)

    def constant_value(self) -> int:
        return join_limbs(limb.constant_value for limb in self.limbs)


class EmulatedField:
    """GF(modulus) gadget on top of a ConstraintSystem.

    Args:
        builder: Host constraint system (its modulus must exceed every limb column)
        modulus: Emulated prime, P by default
    """

    def __init__(self, builder: ConstraintSystem, modulus: int = P):
        if builder.modulus.bit_length() < 2 * LIMB_BITS + 2 * MAX_OVERFLOW + 16:
            raise ValueError("host modulus too small for limb arithmetic")
        if modulus.bit_length() > NUM_LIMBS * LIMB_BITS:
            raise ValueError(f"modulus does not fit in {NUM_LIMBS} limbs")
        self.builder = builder
        self.modulus = modulus
        self._p_limbs = split_limbs(modulus)

    @classmethod
    def on_bw6_761(cls) -> "EmulatedField":
        """Fresh builder over the BW6-761 scalar field with a P-field gadget."""
        return cls(ConstraintSystem(BW6_761_FR))

    # --- Construction ---

    def constant(self, value: int) -> EmulatedElement:
        limbs = [self.builder.constant(limb) for limb in split_limbs(int(value) % self.modulus)]
        return EmulatedElement(limbs, canonical=True)

    def zero(self) -> EmulatedElement:
        return self.constant(0)

    def witness(self, name: str, public: bool = False) -> EmulatedElement:
        """Allocate an input element; limbs are named name[0]..name[3]."""
        alloc = self.builder.public_input if public else self.builder.secret_input
        limbs = [alloc(f"{name}[{i}]") for i in range(NUM_LIMBS)]
        for limb in limbs:
            self.builder.assert_range(limb, LIMB_BITS)
        return EmulatedElement(limbs)

    def assignment(self, name: str, value: int) -> Dict[str, int]:
        """Input assignment for an element created by witness(name)."""
        limbs = split_limbs(int(value) % self.modulus)
        return {f"{name}[{i}]": limb for i, limb in enumerate(limbs)}

    # --- Arithmetic ---

    def add(self, a: EmulatedElement, b: EmulatedElement) -> EmulatedElement:
        if a.is_constant and b.is_constant:
            return self.constant(a.constant_value() + b.constant_value())
        if max(a.overflow, b.overflow) + 1 > MAX_OVERFLOW:
            if a.overflow >= b.overflow:
                a = self._mul_reduce(a, self.constant(1))
            else:
                b = self._mul_reduce(b, self.constant(1))
        limbs = [self.builder.add(x, y) for x, y in zip(a.limbs, b.limbs)]
        return EmulatedElement(limbs, overflow=max(a.overflow, b.overflow) + 1)

    def mul(self, a: EmulatedElement, b: EmulatedElement) -> EmulatedElement:
        if a.is_constant and b.is_constant:
            return self.constant(a.constant_value() * b.constant_value())
        return self._mul_reduce(a, b)

    def reduce(self, a: EmulatedElement) -> EmulatedElement:
        """Canonical representative: limbs < 2^64 and value < P."""
        if a.canonical:
            return a
        r = self._mul_reduce(a, self.constant(1))
        builder = self.builder
        p_minus_1 = self.modulus - 1

        def complement(_modulus: int, ins: List[int]) -> List[int]:
            return split_limbs(p_minus_1 - join_limbs(ins))

        s = builder.hint(complement, r.limbs, NUM_LIMBS)
        for limb in s:
            builder.assert_range(limb, LIMB_BITS)
        # r + s = P - 1 over the integers: both sides < 2^258 < host modulus.
        total = builder.constant(0)
        for i in range(NUM_LIMBS):
            shift = 1 << (LIMB_BITS * i)
            total = builder.add(total, builder.scale(builder.add(r.limbs[i], s[i]), shift))
        builder.assert_equal(total, p_minus_1)
        return EmulatedElement(r.limbs, canonical=True)

    def assert_equal(self, a: EmulatedElement, b: EmulatedElement) -> None:
        a, b = self.reduce(a), self.reduce(b)
        for x, y in zip(a.limbs, b.limbs):
            self.builder.assert_equal(x, y)

    def _mul_reduce(self, a: EmulatedElement, b: EmulatedElement) -> EmulatedElement:
        builder = self.builder
        host = builder.modulus
        p_limbs = self._p_limbs
        modulus = self.modulus

        a_bits = LIMB_BITS * NUM_LIMBS + a.overflow + 1
        b_bits = LIMB_BITS * NUM_LIMBS + b.overflow + 1
        q_bits = max(a_bits + b_bits - (modulus.bit_length() - 1), 1)
        n_q = -(-q_bits // LIMB_BITS)
        n_cols = max(2 * NUM_LIMBS - 1, n_q + NUM_LIMBS - 1)
        carry_bits = 2 * LIMB_BITS + a.overflow + b.overflow - LIMB_BITS + CARRY_MARGIN

        def columns(a_vals, b_vals, q_vals, r_vals) -> List[int]:
            cols = [0] * n_cols
            for i, x in enumerate(a_vals):
                for j, y in enumerate(b_vals):
                    cols[i + j] += x * y
            for i, x in enumerate(q_vals):
                for j, y in enumerate(p_limbs):
                    cols[i + j] -= x * y
            for k, x in enumerate(r_vals):
                cols[k] -= x
            return cols

        def quotient(_modulus: int, ins: List[int]) -> List[int]:
            a_vals, b_vals = ins[:NUM_LIMBS], ins[NUM_LIMBS:]
            product = join_limbs(a_vals) * join_limbs(b_vals)
            q, r = divmod(product, modulus)
            q_vals, r_vals = split_limbs(q, n_q), split_limbs(r)
            carries = []
            carry = 0
            for e in columns(a_vals, b_vals, q_vals, r_vals)[:-1]:
                carry = (e + carry) >> LIMB_BITS
                carries.append(carry % host)
            return q_vals + r_vals + carries

        outs = builder.hint(quotient, a.limbs + b.limbs, n_q + NUM_LIMBS + n_cols - 1)
        q = outs[:n_q]
        r = outs[n_q:n_q + NUM_LIMBS]
        carries = outs[n_q + NUM_LIMBS:]

        for limb in q + r:
            builder.assert_range(limb, LIMB_BITS)
        offset = 1 << carry_bits
        for c in carries:
            builder.assert_range(builder.add(c, offset), carry_bits + 1)

        cols = [builder.constant(0) for _ in range(n_cols)]
        for i, x in enumerate(a.limbs):
            for j, y in enumerate(b.limbs):
                cols[i + j] = builder.add(cols[i + j], builder.mul(x, y))
        for i, x in enumerate(q):
            for j, pj in enumerate(p_limbs):
                cols[i + j] = builder.sub(cols[i + j], builder.scale(x, pj))
        for k, x in enumerate(r):
            cols[k] = builder.sub(cols[k], x)

        base = 1 << LIMB_BITS
        prev: Optional[Variable] = None
        for k in range(n_cols):
            lhs = cols[k] if prev is None else builder.add(cols[k], prev)
            if k < n_cols - 1:
                builder.assert_equal(lhs, builder.scale(carries[k], base))
                prev = carries[k]
            else:
                builder.assert_equal(lhs, 0)

        return EmulatedElement(r)

    # --- Witness Access ---

    def limb_values(self, elem: EmulatedElement, witness: Witness) -> List[int]:
        return [self.builder.value(limb, witness) for limb in elem.limbs]

    def value(self, elem: EmulatedElement, witness: Witness) -> int:
        """Integer value of elem reduced mod the emulated modulus."""
        return join_limbs(self.limb_values(elem, witness)) % self.modulus
