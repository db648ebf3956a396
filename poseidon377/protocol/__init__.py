"""Permutation engine, fixed-rate hash and chunked multi-hash."""

from poseidon377.protocol.multihash import MAX_MULTIHASH_INPUTS, multi_hash
from poseidon377.protocol.permutation import Permutation
from poseidon377.protocol.sponge import (
    hash,
    hash1,
    hash2,
    hash3,
    hash4,
    hash5,
    hash6,
    hash7,
    hash_sequence,
    permutation_for,
)

__all__ = [
    "Permutation",
    "permutation_for",
    "hash1",
    "hash2",
    "hash3",
    "hash4",
    "hash5",
    "hash6",
    "hash7",
    "hash_sequence",
    "multi_hash",
    "MAX_MULTIHASH_INPUTS",
]
