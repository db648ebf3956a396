"""Grain LFSR in self-shrinking mode.

Pseudorandom bit source used by the Poseidon reference parameter procedure
to derive round constants. The 80-bit register is seeded from the instance
description (field type, S-box type, field size, width, round numbers),
clocked 160 times to discard its warm-up output, then read in
self-shrinking mode: bits are consumed in pairs and the second bit of a pair
is emitted only when the first is 1.
"""

from collections import deque
from typing import List

REGISTER_BITS = 80
WARMUP_CLOCKS = 160

# Feedback taps of x^80 + x^67 + x^57 + x^42 + x^29 + x^18 + 1 on the
# register read oldest-first.
TAPS = (62, 51, 38, 23, 13, 0)

FIELD_TYPE_PRIME = 1
SBOX_POWER = 0
SBOX_INVERSE = 1


def _to_bits(value: int, width: int) -> List[int]:
    """Big-endian bit decomposition of value into exactly width bits."""
    return [(value >> (width - 1 - i)) & 1 for i in range(width)]


class GrainLFSR:
    """Self-shrinking Grain LFSR seeded from Poseidon instance parameters.

    Attributes:
        field_bits: Number of bits per sampled field element
    """

    def __init__(self, field_bits: int, width: int, full_rounds: int,
                 partial_rounds: int, sbox: int = SBOX_POWER,
                 field_type: int = FIELD_TYPE_PRIME):
        seed = (
            _to_bits(field_type, 2)
            + _to_bits(sbox, 4)
            + _to_bits(field_bits, 12)
            + _to_bits(width, 12)
            + _to_bits(full_rounds, 10)
            + _to_bits(partial_rounds, 10)
            + [1] * 30
        )
        assert len(seed) == REGISTER_BITS
        self.field_bits = field_bits
        self._register = deque(seed, maxlen=REGISTER_BITS)
        for _ in range(WARMUP_CLOCKS):
            self._clock()

    def _clock(self) -> int:
        reg = self._register
        bit = reg[TAPS[0]] ^ reg[TAPS[1]] ^ reg[TAPS[2]] ^ reg[TAPS[3]] ^ reg[TAPS[4]] ^ reg[TAPS[5]]
        reg.append(bit)
        return bit

    def next_bit(self) -> int:
        """Emit one output bit (self-shrinking)."""
        while True:
            control = self._clock()
            out = self._clock()
            if control == 1:
                return out

    def next_bits(self, n: int) -> List[int]:
        return [self.next_bit() for _ in range(n)]

    def next_field_element(self, modulus: int) -> int:
        """Sample a field element by rejection: field_bits MSB-first, retry if >= modulus."""
        while True:
            value = 0
            for bit in self.next_bits(self.field_bits):
                value = (value << 1) | bit
            if value < modulus:
                return value
