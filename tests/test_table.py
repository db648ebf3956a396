"""Tests for ParameterSet, JSON round-trips and configuration."""

import json
from pathlib import Path

import pytest

from poseidon377.config import Poseidon377Config
from poseidon377.errors import ParameterValidationFailed, UnsupportedRate
from poseidon377.params import export
from poseidon377.params.table import (
    MAX_RATE,
    ParameterSet,
    default_parameter_set,
    parameters_from_dict,
    parameters_to_dict,
)
from poseidon377.primitives.field import ff_ints


class TestParameterSet:
    """Lookup and caching."""

    @pytest.mark.parametrize("rate", range(1, MAX_RATE + 1))
    def test_state_size(self, table, rate: int) -> None:
        """Entry for rate r has width r + 1."""
        assert table.get(rate).state_size == rate + 1

    @pytest.mark.parametrize("rate", [0, 8, -1, 100])
    def test_unsupported_rate(self, table, rate: int) -> None:
        with pytest.raises(UnsupportedRate):
            table.get(rate)

    def test_derived_entries_shared(self) -> None:
        """Two derived sets at the same level return the same objects."""
        a = ParameterSet.derived(Poseidon377Config())
        b = ParameterSet.derived(Poseidon377Config())
        assert a.get(2) is b.get(2)

    def test_default_is_cached(self) -> None:
        """default_parameter_set is built once per configuration."""
        config = Poseidon377Config()
        assert default_parameter_set(config) is default_parameter_set(config)


class TestJson:
    """Published-table format."""

    def test_entry_round_trip(self, table) -> None:
        """to_dict / from_dict preserves every array."""
        params = table.get(2)
        back = parameters_from_dict(json.loads(json.dumps(parameters_to_dict(params))))
        assert back.full_rounds == params.full_rounds
        assert back.partial_rounds == params.partial_rounds
        assert back.alpha == params.alpha
        assert ff_ints(back.optimized_arc) == ff_ints(params.optimized_arc)
        assert ff_ints(back.optimized_mds.w_hat_collection) == ff_ints(
            params.optimized_mds.w_hat_collection)
        assert back.optimized_mds.m00 == params.optimized_mds.m00

    def test_from_json_file(self, table, tmp_path: Path) -> None:
        """A table written with to_json loads back."""
        path = tmp_path / "params.json"
        table.to_json(path)
        loaded = ParameterSet.from_json(path)
        for rate in range(1, MAX_RATE + 1):
            assert ff_ints(loaded.get(rate).arc) == ff_ints(table.get(rate).arc)

    def test_partial_table(self, table) -> None:
        """Rates missing from a loaded table are unsupported."""
        data = {"rates": {"1": parameters_to_dict(table.get(1))}}
        loaded = ParameterSet.from_dict(data)
        assert loaded.get(1).state_size == 2
        with pytest.raises(UnsupportedRate):
            loaded.get(2)

    def test_malformed_entry(self, table) -> None:
        """Missing keys are reported as validation failures."""
        entry = parameters_to_dict(table.get(1))
        del entry["mds"]
        with pytest.raises(ParameterValidationFailed):
            ParameterSet.from_dict({"rates": {"1": entry}})

    def test_missing_rates_key(self) -> None:
        with pytest.raises(ParameterValidationFailed):
            ParameterSet.from_dict({"tables": {}})

    def test_invalid_entry_rejected_at_load(self, table) -> None:
        """Loaded entries are validated immediately."""
        entry = parameters_to_dict(table.get(1))
        entry["full_rounds"] = 7
        with pytest.raises(ParameterValidationFailed, match="full rounds"):
            ParameterSet.from_dict({"rates": {"1": entry}})


class TestConfig:
    """Environment configuration."""

    def test_defaults(self) -> None:
        config = Poseidon377Config.from_env({})
        assert config.security_bits == 128
        assert config.params_path is None

    def test_from_env(self) -> None:
        config = Poseidon377Config.from_env({
            "POSEIDON377_PARAMS": "/tmp/params.json",
            "POSEIDON377_SECURITY_BITS": "100",
        })
        assert config.params_path == Path("/tmp/params.json")
        assert config.security_bits == 100

    def test_empty_path_ignored(self) -> None:
        assert Poseidon377Config.from_env({"POSEIDON377_PARAMS": ""}).params_path is None

    def test_default_uses_json(self, table, tmp_path: Path) -> None:
        """A configured path makes the default table the published one."""
        path = tmp_path / "published.json"
        table.to_json(path)
        loaded = default_parameter_set(Poseidon377Config(params_path=path))
        assert loaded.source == str(path)


class TestExportScript:
    """python -m poseidon377.params.export"""

    def test_single_rate(self, tmp_path: Path) -> None:
        out = tmp_path / "rate1.json"
        assert export.main(["--rate", "1", "-o", str(out)]) == 0
        data = json.loads(out.read_text())
        assert list(data["rates"]) == ["1"]
        assert data["rates"]["1"]["state_size"] == 2
