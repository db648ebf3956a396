"""Poseidon permutation with the optimized partial-round schedule.

Round schedule for state width t, rF = full_rounds / 2:

1. rF full rounds: add optimized_arc row r, x^17 on every element, dense MDS.
2. Transitional round: add row rF, dense MI, no S-box.
3. partial_rounds - 1 middle rounds (r = 0 .. partial_rounds - 2): x^17 on
   element 0, add optimized_arc[(rF + 1 + r) * t] to element 0, sparse
   matrix with index partial_rounds - 1 - r.
4. Final partial round: x^17 on element 0, sparse matrix 0, no constant.
5. rF full rounds, continuing the row counter.

The sparse matrix with index k is [[m00, w_hat_k], [v_k, I]].

The permutation only talks to an ArithmeticContext, so the same schedule
produces concrete digests, native constraints or emulated constraints.
"""

from typing import List, Optional, Sequence

from poseidon377.constraints.base import ArithmeticContext, ConcreteContext, Element
from poseidon377.errors import InverseAlphaFault
from poseidon377.params.types import Parameters
from poseidon377.params.validate import validate


class Permutation:
    """Permutation engine bound to one parameter set and one context.

    Args:
        params: Parameters for the target rate
        ctx: Arithmetic context (concrete if omitted)

    Raises:
        InverseAlphaFault: If params carries the inverse S-box flag
        ParameterValidationFailed: If params is structurally invalid
    """

    def __init__(self, params: Parameters, ctx: Optional[ArithmeticContext] = None):
        if params.alpha.inverse:
            raise InverseAlphaFault("poseidon377: inverse alpha parameter set")
        validate(params)

        self.params = params
        self.ctx = ctx or ConcreteContext()
        self.width = params.state_size

        c = self.ctx.constant
        opt = params.optimized_mds
        self._arc = [c(v) for v in params.optimized_arc]
        self._mds = [c(v) for v in params.mds]
        self._mi = [c(v) for v in opt.mi]
        self._m00 = c(opt.m00)
        self._v = [c(v) for v in opt.v_collection]
        self._w_hat = [c(v) for v in opt.w_hat_collection]

    # --- Round Steps ---

    def _add_row(self, state: List[Element], row: int) -> None:
        base = row * self.width
        for i in range(self.width):
            state[i] = self.ctx.add(state[i], self._arc[base + i])

    def _sbox(self, x: Element) -> Element:
        mul = self.ctx.mul
        x2 = mul(x, x)
        x4 = mul(x2, x2)
        x8 = mul(x4, x4)
        x16 = mul(x8, x8)
        return mul(x16, x)

    def _mix(self, state: List[Element], matrix: List[Element]) -> List[Element]:
        ctx, t = self.ctx, self.width
        out = []
        for i in range(t):
            row = i * t
            acc = ctx.mul(matrix[row], state[0])
            for j in range(1, t):
                acc = ctx.add(acc, ctx.mul(matrix[row + j], state[j]))
            out.append(acc)
        return out

    def _sparse(self, state: List[Element], index: int) -> List[Element]:
        ctx, s = self.ctx, self.width - 1
        v = self._v[index * s:(index + 1) * s]
        w_hat = self._w_hat[index * s:(index + 1) * s]

        first = ctx.mul(self._m00, state[0])
        for i in range(s):
            first = ctx.add(first, ctx.mul(w_hat[i], state[i + 1]))
        out = [first]
        for i in range(s):
            out.append(ctx.add(ctx.mul(v[i], state[0]), state[i + 1]))
        return out

    def _full_round(self, state: List[Element], row: int) -> List[Element]:
        self._add_row(state, row)
        state = [self._sbox(x) for x in state]
        return self._mix(state, self._mds)

    # --- Permutation ---

    def permute(self, state: Sequence[Element]) -> List[Element]:
        """Apply the permutation to a full state of width state_size.

        Returns:
            New state list; the input sequence is not modified
        """
        if len(state) != self.width:
            raise ValueError(f"state must have {self.width} elements, got {len(state)}")
        params = self.params
        rf = params.full_rounds // 2
        rp = params.partial_rounds
        state = list(state)

        row = 0
        for _ in range(rf):
            state = self._full_round(state, row)
            row += 1

        self._add_row(state, row)
        state = self._mix(state, self._mi)
        row += 1

        for r in range(rp - 1):
            state[0] = self._sbox(state[0])
            state[0] = self.ctx.add(state[0], self._arc[row * self.width])
            state = self._sparse(state, rp - 1 - r)
            row += 1

        state[0] = self._sbox(state[0])
        state = self._sparse(state, 0)

        for _ in range(rf):
            state = self._full_round(state, row)
            row += 1

        return state
