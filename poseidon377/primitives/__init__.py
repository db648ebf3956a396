"""Primitives - field arithmetic and the Grain bit source."""

from poseidon377.primitives.field import (
    BW6_761_FR,
    FF,
    FIELD_BITS,
    FIELD_BYTES,
    P,
    domain_from_bytes,
    ff_array,
    ff_ints,
    to_ff,
)
from poseidon377.primitives.grain import GrainLFSR

__all__ = [
    # Field
    "FF",
    "P",
    "BW6_761_FR",
    "FIELD_BITS",
    "FIELD_BYTES",
    "to_ff",
    "ff_array",
    "ff_ints",
    "domain_from_bytes",
    # Grain
    "GrainLFSR",
]
