"""BLS12-377 scalar field GF(P) and the emulation host field.

Uses galois library for all field arithmetic. FF is the field type every
concrete permutation value lives in.

The field is constructed with an explicit primitive element and verify=False
so galois never needs to factor P - 1 at import time.
"""

from typing import Iterable, List, Union

import galois
import numpy as np

# --- Field Construction ---

P = 8444461749428370424248824938781546531375899335154063827935233455917409239041
"""BLS12-377 scalar field modulus (the Poseidon field)."""

MULTIPLICATIVE_GENERATOR = 22

FF = galois.GF(P, primitive_element=MULTIPLICATIVE_GENERATOR, verify=False)
"""Base field GF(P) - BLS12-377 scalar field."""

BW6_761_FR = 258664426012969094010652733694893533536393512754914660539884262666720468348340822774968888139573360124440321458177
"""BW6-761 scalar field modulus (= BLS12-377 base field), host of emulated circuits."""

FIELD_BITS = P.bit_length()
FIELD_BYTES = (FIELD_BITS + 7) // 8

FieldLike = Union[int, "FF"]


# --- Conversion ---

def to_ff(value: FieldLike) -> FF:
    """Coerce an int or FF scalar to an FF scalar, reducing ints mod P."""
    if isinstance(value, FF):
        return value
    return FF(int(value) % P)


def ff_array(values: Iterable[FieldLike]) -> FF:
    """Build a read-only 1-D FF array from ints or FF scalars."""
    arr = FF([int(v) % P for v in values])
    arr.setflags(write=False)
    return arr


def ff_ints(values: FF) -> List[int]:
    """Extract Python ints from an FF array."""
    return [int(v) for v in np.asarray(values).ravel()]


def domain_from_bytes(data: bytes) -> FF:
    """Reduce a byte string into a field element, reading it little-endian.

    Equivalent to reversing the buffer and reading it big-endian, then
    reducing modulo P. Used to derive fixed domain-separation constants such
    as ``domain_from_bytes(b"Penumbra_TestVec")``.

    Args:
        data: Arbitrary byte string

    Returns:
        FF scalar ``int.from_bytes(data, "little") mod P``
    """
    return FF(int.from_bytes(bytes(data), "little") % P)
