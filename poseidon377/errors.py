"""Exceptions raised at the hashing API boundary.

Shape and configuration problems are recoverable and derive from
Poseidon377Error (a ValueError). An inverse-alpha parameter set means the
constant table itself is corrupt; it raises InverseAlphaFault, an
AssertionError, so generic error handlers do not swallow it.
"""


class Poseidon377Error(ValueError):
    """Base class for recoverable hashing errors."""


class UnsupportedRate(Poseidon377Error):
    """Number of inputs has no parameter set (rates 1..7 only)."""

    def __init__(self, rate: int):
        super().__init__(f"poseidon377: unsupported rate {rate}")
        self.rate = rate


class InvalidRateShape(Poseidon377Error):
    """Parameter table entry whose state size is not rate + 1."""

    def __init__(self, rate: int, state_size: int):
        super().__init__(
            f"poseidon377: inconsistent parameter set for rate {rate} (state size {state_size})"
        )
        self.rate = rate
        self.state_size = state_size


class ParameterValidationFailed(Poseidon377Error):
    """Structural check of a parameter set failed."""


class NoInputs(Poseidon377Error):
    """multi_hash called with an empty input list."""

    def __init__(self):
        super().__init__("poseidon377: need at least 1 input")


class TooManyInputs(Poseidon377Error):
    """multi_hash called with more inputs than the chunking cap."""

    def __init__(self, count: int, limit: int):
        super().__init__(f"poseidon377: too many inputs ({count} > {limit})")
        self.count = count
        self.limit = limit


class InverseAlphaFault(AssertionError):
    """A parameter set carries the inverse S-box flag; the table is corrupt."""


class UnsatisfiedConstraint(Poseidon377Error):
    """A solved witness violates a recorded constraint."""
