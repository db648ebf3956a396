"""Structural validation of parameter sets.

validate() is pure: it only inspects lengths and flags, never the values,
so it is cheap enough to run once per permutation instantiation.
"""

from poseidon377.errors import ParameterValidationFailed
from poseidon377.params.types import ALPHA, Parameters


def _check_len(name: str, arr, expected: int) -> None:
    if len(arr) != expected:
        raise ParameterValidationFailed(
            f"poseidon377: {name} length mismatch (expected {expected}, got {len(arr)})"
        )


def validate(params: Parameters) -> None:
    """Check the shape invariants of a parameter set.

    Args:
        params: Parameter set to check

    Raises:
        ParameterValidationFailed: If the S-box is the inverse variant or not
            x^17, full_rounds is odd, or any constant array has the wrong length
    """
    if params.alpha.inverse:
        raise ParameterValidationFailed("poseidon377: unsupported inverse alpha")
    if params.alpha.exponent != ALPHA:
        raise ParameterValidationFailed(
            f"poseidon377: unsupported alpha {params.alpha.exponent} (only {ALPHA})"
        )
    if params.full_rounds % 2 != 0:
        raise ParameterValidationFailed(
            f"poseidon377: full rounds must be even, got {params.full_rounds}"
        )
    if params.partial_rounds < 1:
        raise ParameterValidationFailed(
            f"poseidon377: need at least one partial round, got {params.partial_rounds}"
        )

    t = params.state_size
    rounds = (params.full_rounds + params.partial_rounds) * t
    opt = params.optimized_mds

    _check_len("optimized_arc", params.optimized_arc, rounds)
    _check_len("arc", params.arc, rounds)
    _check_len("mds", params.mds, t * t)
    _check_len("mi", opt.mi, t * t)
    _check_len("m_hat", opt.m_hat, (t - 1) * (t - 1))
    _check_len("v", opt.v, t - 1)
    _check_len("w", opt.w, t - 1)
    _check_len("m_prime", opt.m_prime, t * t)
    _check_len("m_double_prime", opt.m_double_prime, t * t)
    _check_len("m_inverse", opt.m_inverse, t * t)
    _check_len("m_hat_inverse", opt.m_hat_inverse, (t - 1) * (t - 1))

    sparse = params.partial_rounds * (t - 1)
    _check_len("v_collection", opt.v_collection, sparse)
    _check_len("w_hat_collection", opt.w_hat_collection, sparse)
