"""Parameter model for the Poseidon permutation.

All constant arrays are flat, row-major, read-only 1-D FF arrays:

- arc, optimized_arc: (full_rounds + partial_rounds) rows of state_size
- mds, mi: state_size x state_size
- v_collection, w_hat_collection: partial_rounds rows of state_size - 1

The audit matrices in OptimizedMDS (m_hat, v, w, m_prime, m_double_prime,
m_inverse, m_hat_inverse) describe the first factorization step of the MDS
matrix. The permutation never reads them; they are kept so a table can be
checked against its derivation.
"""

from dataclasses import dataclass

from poseidon377.primitives.field import FF

ALPHA = 17


@dataclass(frozen=True)
class Alpha:
    """S-box exponent. inverse=True (x^-1 S-box) is never a valid engine input."""
    exponent: int = ALPHA
    inverse: bool = False


@dataclass(frozen=True, eq=False)
class OptimizedMDS:
    """Matrices of the sparse partial-round decomposition.

    Attributes:
        m_hat: Lower-right (t-1)x(t-1) block of the MDS matrix
        v: First column of the MDS matrix below the diagonal, length t-1
        w: First row of the MDS matrix right of the diagonal, length t-1
        m_prime: diag(1, m_hat), t x t
        m_double_prime: Sparse factor with mds = m_double_prime @ m_prime
        m_inverse: Inverse of the MDS matrix
        m_hat_inverse: Inverse of m_hat
        m00: mds[0, 0], the top-left entry shared by every sparse matrix
        mi: Dense matrix applied once in the transitional round
        v_collection: Per-round sparse first columns, indexed by matrix index
        w_hat_collection: Per-round sparse first rows, indexed by matrix index
    """
    m_hat: FF
    v: FF
    w: FF
    m_prime: FF
    m_double_prime: FF
    m_inverse: FF
    m_hat_inverse: FF
    m00: FF
    mi: FF
    v_collection: FF
    w_hat_collection: FF


@dataclass(frozen=True, eq=False)
class Parameters:
    """Constants for one rate of the permutation.

    Attributes:
        m: Security level in bits
        state_size: Permutation width t = rate + 1
        full_rounds: Total number of full rounds (even)
        partial_rounds: Number of partial rounds
        alpha: S-box exponent
        arc: Round constants of the unoptimized schedule
        optimized_arc: Round constants of the optimized schedule
        mds: Dense MDS matrix
        optimized_mds: Sparse decomposition of the partial rounds
    """
    m: int
    state_size: int
    full_rounds: int
    partial_rounds: int
    alpha: Alpha
    arc: FF
    optimized_arc: FF
    mds: FF
    optimized_mds: OptimizedMDS

    @property
    def rate(self) -> int:
        return self.state_size - 1

    @property
    def total_rounds(self) -> int:
        return self.full_rounds + self.partial_rounds
