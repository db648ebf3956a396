"""Arithmetic contexts the permutation runs on.

ConcreteContext computes hashes directly. CircuitContext records native
constraints over P. EmulatedContext records limb constraints over a
different host field.
"""

from .base import (
    ArithmeticContext,
    CircuitContext,
    ConcreteContext,
    EmulatedContext,
)

__all__ = [
    "ArithmeticContext",
    "ConcreteContext",
    "CircuitContext",
    "EmulatedContext",
]
