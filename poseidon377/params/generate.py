"""Deterministic derivation of Poseidon377 parameter sets.

Follows the Poseidon reference procedure for an x^17 instance over the
BLS12-377 scalar field:

1. Round numbers from the security bounds (see rounds.py).
2. Round constants from the Grain LFSR seeded with the instance shape.
3. A Cauchy MDS matrix M[i][j] = 1 / (x_i + y_j), x_i = i, y_j = t + j.
4. The optimized schedule: partial-round constants moved backwards through
   the inverse MDS matrix, and the partial-round MDS products factored into
   one dense matrix MI followed by sparse matrices.

All matrices are galois FF arrays; np.linalg.inv is galois's field inverse.
"""

import logging
from math import gcd
from typing import List, Tuple

import numpy as np

from poseidon377.params.rounds import round_numbers
from poseidon377.params.types import ALPHA, Alpha, OptimizedMDS, Parameters
from poseidon377.primitives.field import FF, FIELD_BITS, P, ff_array
from poseidon377.primitives.grain import GrainLFSR

logger = logging.getLogger(__name__)

DEFAULT_SECURITY_BITS = 128


# --- Constants ---

def generate_round_constants(t: int, full_rounds: int, partial_rounds: int) -> FF:
    """Sample (R_F + R_P) * t round constants from the Grain LFSR.

    Returns:
        FF matrix of shape (R_F + R_P, t), one row per round
    """
    grain = GrainLFSR(FIELD_BITS, t, full_rounds, partial_rounds)
    count = (full_rounds + partial_rounds) * t
    values = [grain.next_field_element(P) for _ in range(count)]
    return FF(values).reshape(full_rounds + partial_rounds, t)


def cauchy_mds(t: int) -> FF:
    """Cauchy matrix with x_i = i and y_j = t + j (all x_i + y_j distinct, nonzero)."""
    return FF([[int(FF(i + t + j) ** -1) for j in range(t)] for i in range(t)])


# --- Optimization ---

def optimize_round_constants(arc: FF, mds: FF, full_rounds: int, partial_rounds: int) -> FF:
    """Move partial-round constants backwards through the MDS layer.

    A constant added at the start of partial round k is equivalent to adding
    M^-1 c right before the mix of round k - 1. Its first component stays after
    that round's S-box as a scalar; the rest commutes with the S-box and
    merges into round k - 1's constant. Repeating down to round 0 leaves one
    full vector at the transitional round and one scalar per middle round.

    Args:
        arc: Round constants, shape (R_F + R_P, t)
        mds: Dense MDS matrix, shape (t, t)
        full_rounds: Total full rounds
        partial_rounds: Number of partial rounds

    Returns:
        Optimized constants, same shape as arc
    """
    rf = full_rounds // 2
    m_inv = np.linalg.inv(mds)
    scalars = [FF(0)] * (partial_rounds - 1)

    acc = arc[rf + partial_rounds - 1].copy()
    for k in range(partial_rounds - 1, 0, -1):
        moved = m_inv @ acc
        scalars[k - 1] = moved[0]
        acc = arc[rf + k - 1].copy()
        acc[1:] += moved[1:]

    opt = arc.copy()
    opt[rf] = acc
    for r in range(partial_rounds - 1):
        opt[rf + 1 + r] = FF.Zeros(arc.shape[1])
        opt[rf + 1 + r, 0] = scalars[r]
    return opt


def _block_identity(inner: FF) -> FF:
    """diag(1, inner)."""
    n = inner.shape[0] + 1
    out = FF.Identity(n)
    out[1:, 1:] = inner
    return out


def sparse_factorization(mds: FF, partial_rounds: int) -> Tuple[FF, List[FF], List[FF]]:
    """Factor the partial-round mixes into MI and sparse matrices.

    Working from the last partial round backwards, each A = [[a00, b], [c, D]]
    is split as S @ diag(1, D) with S = [[a00, b D^-1], [c, I]]. diag(1, D)
    commutes with the first-element S-box and is folded into the previous
    round's mix. What remains after the first partial round is MI.

    Returns:
        (mi, v_collection, w_hat_collection); collections are indexed so that
        entry 0 belongs to the last partial round
    """
    v_collection = []
    w_hat_collection = []
    m_prime = None
    for _ in range(partial_rounds - 1, -1, -1):
        a = mds if m_prime is None else m_prime @ mds
        b = a[0, 1:]
        c = a[1:, 0]
        d = a[1:, 1:]
        v_collection.append(c.copy())
        w_hat_collection.append(b @ np.linalg.inv(d))
        m_prime = _block_identity(d)
    return m_prime, v_collection, w_hat_collection


def optimized_mds(mds: FF, partial_rounds: int) -> OptimizedMDS:
    t = mds.shape[0]
    m_hat = mds[1:, 1:]
    v = mds[1:, 0]
    w = mds[0, 1:]
    m_hat_inverse = np.linalg.inv(m_hat)

    m_double_prime = FF.Identity(t)
    m_double_prime[0, 0] = mds[0, 0]
    m_double_prime[0, 1:] = w @ m_hat_inverse
    m_double_prime[1:, 0] = v

    mi, v_collection, w_hat_collection = sparse_factorization(mds, partial_rounds)
    return OptimizedMDS(
        m_hat=ff_array(m_hat.ravel()),
        v=ff_array(v),
        w=ff_array(w),
        m_prime=ff_array(_block_identity(m_hat).ravel()),
        m_double_prime=ff_array(m_double_prime.ravel()),
        m_inverse=ff_array(np.linalg.inv(mds).ravel()),
        m_hat_inverse=ff_array(m_hat_inverse.ravel()),
        m00=FF(int(mds[0, 0])),
        mi=ff_array(mi.ravel()),
        v_collection=ff_array(x for vec in v_collection for x in vec),
        w_hat_collection=ff_array(x for vec in w_hat_collection for x in vec),
    )


# --- Entry Point ---

def generate_parameters(rate: int, security_bits: int = DEFAULT_SECURITY_BITS) -> Parameters:
    """Derive the full parameter set for one rate.

    Args:
        rate: Number of absorbed elements (state width is rate + 1)
        security_bits: Target security level

    Returns:
        Parameters with both the plain and optimized schedules
    """
    assert gcd(ALPHA, P - 1) == 1, "x^17 is not a permutation of the field"
    t = rate + 1
    full_rounds, partial_rounds = round_numbers(P, t, ALPHA, security_bits)
    logger.debug("rate %d: t=%d R_F=%d R_P=%d", rate, t, full_rounds, partial_rounds)

    arc = generate_round_constants(t, full_rounds, partial_rounds)
    mds = cauchy_mds(t)
    oarc = optimize_round_constants(arc, mds, full_rounds, partial_rounds)

    return Parameters(
        m=security_bits,
        state_size=t,
        full_rounds=full_rounds,
        partial_rounds=partial_rounds,
        alpha=Alpha(exponent=ALPHA, inverse=False),
        arc=ff_array(arc.ravel()),
        optimized_arc=ff_array(oarc.ravel()),
        mds=ff_array(mds.ravel()),
        optimized_mds=optimized_mds(mds, partial_rounds),
    )
