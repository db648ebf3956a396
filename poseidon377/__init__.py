"""Poseidon377: Poseidon hashing over the BLS12-377 scalar field.

Hashes run on plain field elements (ConcreteContext), on native constraint
variables (CircuitContext) or on non-native limb vectors inside a
BW6-761 constraint system (EmulatedContext).

Example:
    from poseidon377 import domain_from_bytes, hash2, multi_hash

    domain = domain_from_bytes(b"Penumbra_TestVec")
    digest = hash2(domain, 1, 2)
    digest = multi_hash(domain, list(range(16)))
"""

from poseidon377.config import Poseidon377Config
from poseidon377.constraints import (
    ArithmeticContext,
    CircuitContext,
    ConcreteContext,
    EmulatedContext,
)
from poseidon377.errors import (
    InvalidRateShape,
    InverseAlphaFault,
    NoInputs,
    ParameterValidationFailed,
    Poseidon377Error,
    TooManyInputs,
    UnsatisfiedConstraint,
    UnsupportedRate,
)
from poseidon377.params import (
    MAX_RATE,
    Alpha,
    OptimizedMDS,
    Parameters,
    ParameterSet,
    default_parameter_set,
    validate,
)
from poseidon377.primitives.field import FF, P, domain_from_bytes
from poseidon377.protocol import (
    MAX_MULTIHASH_INPUTS,
    Permutation,
    hash,
    hash1,
    hash2,
    hash3,
    hash4,
    hash5,
    hash6,
    hash7,
    multi_hash,
)

__version__ = "0.1.0"

__all__ = [
    # Field
    "FF",
    "P",
    "domain_from_bytes",
    # Hashing (hash shadows the builtin and is imported by name only)
    "hash1",
    "hash2",
    "hash3",
    "hash4",
    "hash5",
    "hash6",
    "hash7",
    "multi_hash",
    "Permutation",
    "MAX_RATE",
    "MAX_MULTIHASH_INPUTS",
    # Parameters
    "Alpha",
    "OptimizedMDS",
    "Parameters",
    "ParameterSet",
    "default_parameter_set",
    "validate",
    "Poseidon377Config",
    # Contexts
    "ArithmeticContext",
    "ConcreteContext",
    "CircuitContext",
    "EmulatedContext",
    # Errors
    "Poseidon377Error",
    "UnsupportedRate",
    "InvalidRateShape",
    "ParameterValidationFailed",
    "TooManyInputs",
    "NoInputs",
    "UnsatisfiedConstraint",
    "InverseAlphaFault",
]
