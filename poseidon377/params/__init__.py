"""Parameter sets: model, validation, derivation and the per-rate table."""

from poseidon377.params.generate import generate_parameters
from poseidon377.params.rounds import round_numbers
from poseidon377.params.table import (
    MAX_RATE,
    ParameterSet,
    default_parameter_set,
)
from poseidon377.params.types import ALPHA, Alpha, OptimizedMDS, Parameters
from poseidon377.params.validate import validate

__all__ = [
    # Model
    "ALPHA",
    "Alpha",
    "OptimizedMDS",
    "Parameters",
    "validate",
    # Derivation
    "generate_parameters",
    "round_numbers",
    # Table
    "MAX_RATE",
    "ParameterSet",
    "default_parameter_set",
]
