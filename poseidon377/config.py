"""Runtime configuration."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

PARAMS_ENV_VAR = "POSEIDON377_PARAMS"
SECURITY_BITS_ENV_VAR = "POSEIDON377_SECURITY_BITS"


@dataclass(frozen=True)
class Poseidon377Config:
    """Where the parameter table comes from."""
    security_bits: int = 128  # Target security level for derived tables
    params_path: Optional[Path] = None  # Published JSON table; derived table if None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Poseidon377Config":
        """Read POSEIDON377_PARAMS and POSEIDON377_SECURITY_BITS.

        Empty or unset variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        path = env.get(PARAMS_ENV_VAR) or None
        bits = env.get(SECURITY_BITS_ENV_VAR) or None
        return cls(
            security_bits=int(bits) if bits is not None else cls.security_bits,
            params_path=Path(path) if path is not None else None,
        )
