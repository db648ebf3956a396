"""Fixed-rate hash: one permutation over [domain, *inputs], digest state[1].

Concrete-context engines are kept on the ParameterSet they were built from,
one per rate. Circuit contexts get a fresh engine per call since their
constants belong to the caller's builder.
"""

from typing import Optional, Sequence

from poseidon377.constraints.base import ArithmeticContext, ConcreteContext, Element
from poseidon377.errors import InvalidRateShape, UnsupportedRate
from poseidon377.params.table import MAX_RATE, ParameterSet, default_parameter_set
from poseidon377.protocol.permutation import Permutation

_CONCRETE = ConcreteContext()


def _build_concrete(params) -> Permutation:
    return Permutation(params, _CONCRETE)


def permutation_for(rate: int, ctx: Optional[ArithmeticContext] = None,
                    parameter_set: Optional[ParameterSet] = None) -> Permutation:
    """Validated permutation engine for a rate.

    Raises:
        UnsupportedRate: If rate is outside 1..7
        InvalidRateShape: If the table entry's state size is not rate + 1
    """
    if not 1 <= rate <= MAX_RATE:
        raise UnsupportedRate(rate)
    parameter_set = parameter_set or default_parameter_set()
    params = parameter_set.get(rate)
    if params.state_size != rate + 1:
        raise InvalidRateShape(rate, params.state_size)
    if ctx is None or ctx is _CONCRETE:
        return parameter_set.engine(rate, _build_concrete)
    return Permutation(params, ctx)


def hash(domain, *inputs, ctx: Optional[ArithmeticContext] = None,
         parameter_set: Optional[ParameterSet] = None) -> Element:
    """Hash 1..7 field elements under a domain separator.

    Shadows the builtin hash, so it is left out of __all__ and has to be
    imported by name.

    Args:
        domain: Domain-separation element
        *inputs: Between 1 and 7 elements (ints, FF scalars or context elements)
        ctx: Arithmetic context, concrete if omitted
        parameter_set: Parameter table, process default if omitted

    Returns:
        Second state element after the permutation, reduced by the context
    """
    ctx = ctx or _CONCRETE
    engine = permutation_for(len(inputs), ctx, parameter_set)
    state = [ctx.coerce(domain)] + [ctx.coerce(x) for x in inputs]
    out = engine.permute(state)
    return ctx.reduce(out[1])


def hash_sequence(domain, inputs: Sequence, ctx: Optional[ArithmeticContext] = None,
                  parameter_set: Optional[ParameterSet] = None) -> Element:
    return hash(domain, *inputs, ctx=ctx, parameter_set=parameter_set)


def hash1(domain, a, **kwargs) -> Element:
    return hash(domain, a, **kwargs)


def hash2(domain, a, b, **kwargs) -> Element:
    return hash(domain, a, b, **kwargs)


def hash3(domain, a, b, c, **kwargs) -> Element:
    return hash(domain, a, b, c, **kwargs)


def hash4(domain, a, b, c, d, **kwargs) -> Element:
    return hash(domain, a, b, c, d, **kwargs)


def hash5(domain, a, b, c, d, e, **kwargs) -> Element:
    return hash(domain, a, b, c, d, e, **kwargs)


def hash6(domain, a, b, c, d, e, f, **kwargs) -> Element:
    return hash(domain, a, b, c, d, e, f, **kwargs)


def hash7(domain, a, b, c, d, e, f, g, **kwargs) -> Element:
    return hash(domain, a, b, c, d, e, f, g, **kwargs)
