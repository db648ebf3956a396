"""Process-wide parameter table keyed by rate.

A ParameterSet either derives entries lazily (memoized per rate and
security level) or holds a published table loaded from JSON. JSON tables
store every field element as a decimal string:

    {
      "rates": {
        "1": {
          "m": 128, "state_size": 2, "full_rounds": 8, "partial_rounds": 31,
          "alpha": {"exponent": 17, "inverse": false},
          "arc": ["..."], "optimized_arc": ["..."], "mds": ["..."],
          "optimized_mds": {"m_hat": ["..."], ..., "m00": "...", ...}
        },
        ...
      }
    }
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from poseidon377.config import Poseidon377Config
from poseidon377.errors import ParameterValidationFailed, UnsupportedRate
from poseidon377.params.generate import generate_parameters
from poseidon377.params.types import Alpha, OptimizedMDS, Parameters
from poseidon377.params.validate import validate
from poseidon377.primitives.field import FF, ff_array, ff_ints

logger = logging.getLogger(__name__)

MAX_RATE = 7
RATES = range(1, MAX_RATE + 1)

_MATRIX_FIELDS = (
    "m_hat", "v", "w", "m_prime", "m_double_prime", "m_inverse",
    "m_hat_inverse", "mi", "v_collection", "w_hat_collection",
)


@lru_cache(maxsize=None)
def _derived(rate: int, security_bits: int) -> Parameters:
    return generate_parameters(rate, security_bits)


# --- Serialization ---

def parameters_to_dict(params: Parameters) -> Dict[str, Any]:
    """JSON-ready dict with field elements as decimal strings."""
    def dec(arr):
        return [str(v) for v in ff_ints(arr)]

    opt = params.optimized_mds
    opt_dict = {name: dec(getattr(opt, name)) for name in _MATRIX_FIELDS}
    opt_dict["m00"] = str(int(opt.m00))
    return {
        "m": params.m,
        "state_size": params.state_size,
        "full_rounds": params.full_rounds,
        "partial_rounds": params.partial_rounds,
        "alpha": {"exponent": params.alpha.exponent, "inverse": params.alpha.inverse},
        "arc": dec(params.arc),
        "optimized_arc": dec(params.optimized_arc),
        "mds": dec(params.mds),
        "optimized_mds": opt_dict,
    }


def parameters_from_dict(data: Mapping[str, Any]) -> Parameters:
    """Inverse of parameters_to_dict. Raises ParameterValidationFailed on bad input."""
    try:
        opt = data["optimized_mds"]
        optimized = OptimizedMDS(
            m00=FF(int(opt["m00"])),
            **{name: ff_array(int(v) for v in opt[name]) for name in _MATRIX_FIELDS},
        )
        alpha = data["alpha"]
        params = Parameters(
            m=int(data["m"]),
            state_size=int(data["state_size"]),
            full_rounds=int(data["full_rounds"]),
            partial_rounds=int(data["partial_rounds"]),
            alpha=Alpha(exponent=int(alpha["exponent"]), inverse=bool(alpha["inverse"])),
            arc=ff_array(int(v) for v in data["arc"]),
            optimized_arc=ff_array(int(v) for v in data["optimized_arc"]),
            mds=ff_array(int(v) for v in data["mds"]),
            optimized_mds=optimized,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ParameterValidationFailed(f"poseidon377: malformed parameter entry: {e}") from e
    return params


# --- Table ---

class ParameterSet:
    """Read-only mapping from rate (1..7) to Parameters.

    Instances are cheap; derived tables share the module-level cache, so
    two derived sets at the same security level hand out the same objects.
    Engines built from an instance are kept on that instance and are freed
    with it.
    """

    def __init__(self, factory: Callable[[int], Parameters], source: str):
        self._factory = factory
        self._engines: Dict[int, Any] = {}
        self.source = source

    @classmethod
    def derived(cls, config: Optional[Poseidon377Config] = None) -> "ParameterSet":
        config = config or Poseidon377Config()
        bits = config.security_bits
        return cls(lambda rate: _derived(rate, bits), source=f"derived(m={bits})")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: str = "dict") -> "ParameterSet":
        """Build a table from the JSON shape. Every entry is validated up front."""
        try:
            raw = data["rates"]
            entries = {int(rate): parameters_from_dict(entry) for rate, entry in raw.items()}
        except ParameterValidationFailed:
            raise
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise ParameterValidationFailed(f"poseidon377: malformed parameter table: {e}") from e
        for params in entries.values():
            validate(params)

        def lookup(rate: int) -> Parameters:
            if rate not in entries:
                raise UnsupportedRate(rate)
            return entries[rate]

        return cls(lookup, source=source)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "ParameterSet":
        path = Path(path)
        logger.debug("loading parameter table from %s", path)
        with open(path) as f:
            data = json.load(f)
        return cls.from_dict(data, source=str(path))

    def get(self, rate: int) -> Parameters:
        """Parameters for a rate.

        Raises:
            UnsupportedRate: If rate is outside 1..7 or missing from the table
        """
        if rate not in RATES:
            raise UnsupportedRate(rate)
        return self._factory(rate)

    def engine(self, rate: int, build: Callable[[Parameters], Any]) -> Any:
        """Memoized build(self.get(rate)), one per rate for this table."""
        if rate not in self._engines:
            self._engines[rate] = build(self.get(rate))
        return self._engines[rate]

    def to_dict(self) -> Dict[str, Any]:
        return {"rates": {str(rate): parameters_to_dict(self.get(rate)) for rate in RATES}}

    def to_json(self, path: Optional[Union[str, Path]] = None) -> str:
        """Serialize all seven rates; also write to path if given."""
        text = json.dumps(self.to_dict(), indent=2)
        if path is not None:
            Path(path).write_text(text + "\n")
        return text

    def __repr__(self) -> str:
        return f"ParameterSet({self.source})"


@lru_cache(maxsize=None)
def _default(config: Poseidon377Config) -> ParameterSet:
    if config.params_path is not None:
        return ParameterSet.from_json(config.params_path)
    return ParameterSet.derived(config)


def default_parameter_set(config: Optional[Poseidon377Config] = None) -> ParameterSet:
    """The table used when callers pass none.

    Published table if POSEIDON377_PARAMS names a file, derived otherwise.
    """
    return _default(config or Poseidon377Config.from_env())
