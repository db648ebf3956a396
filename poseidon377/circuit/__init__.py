"""Constraint-system collaborators for the symbolic and emulated substrates."""

from poseidon377.circuit.builder import ConstraintSystem, Variable, Witness
from poseidon377.circuit.emulated import (
    LIMB_BITS,
    NUM_LIMBS,
    EmulatedElement,
    EmulatedField,
    join_limbs,
    split_limbs,
)

__all__ = [
    # Builder
    "ConstraintSystem",
    "Variable",
    "Witness",
    # Emulated field
    "EmulatedElement",
    "EmulatedField",
    "LIMB_BITS",
    "NUM_LIMBS",
    "join_limbs",
    "split_limbs",
]
