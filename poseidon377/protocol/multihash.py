"""Chunked hashing of up to 256 elements.

While more than MAX_RATE elements remain, the sequence is split left to
right into groups of at most MAX_RATE, each group is hashed under the same
domain, and the group digests replace the sequence. The remaining 1..7
elements are hashed once more. 16 inputs: groups of 7, 7, 2, then one
3-element hash.
"""

from typing import List, Optional, Sequence

from poseidon377.constraints.base import ArithmeticContext, Element
from poseidon377.errors import NoInputs, TooManyInputs
from poseidon377.params.table import MAX_RATE, ParameterSet
from poseidon377.protocol.sponge import hash_sequence

MAX_MULTIHASH_INPUTS = 256


def chunk(values: Sequence, size: int = MAX_RATE) -> List[Sequence]:
    return [values[i:i + size] for i in range(0, len(values), size)]


def multi_hash(domain, inputs: Sequence, ctx: Optional[ArithmeticContext] = None,
               parameter_set: Optional[ParameterSet] = None) -> Element:
    """Hash 1..256 elements by repeated chunking.

    Raises:
        NoInputs: If inputs is empty
        TooManyInputs: If there are more than 256 inputs
    """
    if len(inputs) == 0:
        raise NoInputs()
    if len(inputs) > MAX_MULTIHASH_INPUTS:
        raise TooManyInputs(len(inputs), MAX_MULTIHASH_INPUTS)

    current = list(inputs)
    while len(current) > MAX_RATE:
        current = [hash_sequence(domain, group, ctx=ctx, parameter_set=parameter_set)
                   for group in chunk(current)]
    return hash_sequence(domain, current, ctx=ctx, parameter_set=parameter_set)
