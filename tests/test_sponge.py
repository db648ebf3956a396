"""Tests for the fixed-rate hash."""

import gc
import weakref

import pytest

import poseidon377
from poseidon377 import (
    FF,
    P,
    hash,
    hash1,
    hash2,
    hash3,
    hash4,
    hash5,
    hash6,
    hash7,
)
from poseidon377.circuit.builder import ConstraintSystem
from poseidon377.constraints.base import CircuitContext
from poseidon377.errors import InvalidRateShape, Poseidon377Error, UnsupportedRate
from poseidon377.params.table import ParameterSet
from poseidon377.protocol import sponge
from poseidon377.protocol.permutation import Permutation
from poseidon377.protocol.sponge import permutation_for

HASH_N = [hash1, hash2, hash3, hash4, hash5, hash6, hash7]


class TestHash:
    """Concrete hashing."""

    @pytest.mark.parametrize("rate", range(1, 8))
    def test_digest_is_second_element(self, table, rate: int) -> None:
        """hash returns state[1] of the permutation of [domain, *inputs]."""
        inputs = [FF(i + 1) for i in range(rate)]
        out = Permutation(table.get(rate)).permute([FF(5)] + inputs)
        assert hash(FF(5), *inputs) == out[1]

    @pytest.mark.parametrize("rate", range(1, 8))
    def test_arity_wrappers(self, rate: int) -> None:
        """hashN equals hash with N inputs."""
        inputs = [3 * i + 1 for i in range(rate)]
        assert HASH_N[rate - 1](7, *inputs) == hash(7, *inputs)

    def test_int_inputs_reduced(self) -> None:
        """Python ints are taken modulo P."""
        assert hash(1, P + 2, 3) == hash(FF(1), FF(2), FF(3))

    def test_domain_separates(self) -> None:
        assert hash(0, 1, 2) != hash(1, 1, 2)

    def test_order_matters(self) -> None:
        assert hash(0, 1, 2) != hash(0, 2, 1)

    @pytest.mark.parametrize("count", [0, 8, 12])
    def test_unsupported_rate(self, count: int) -> None:
        with pytest.raises(UnsupportedRate):
            hash(0, *range(count))

    def test_unsupported_rate_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            hash(0)
        assert issubclass(UnsupportedRate, Poseidon377Error)

    def test_invalid_rate_shape(self, table) -> None:
        """A table entry whose width does not match its rate is rejected."""
        wrong = table.get(2)
        shifted = ParameterSet(lambda rate: wrong, source="broken")
        with pytest.raises(InvalidRateShape):
            hash(0, 1, parameter_set=shifted)

    def test_explicit_parameter_set(self, table) -> None:
        assert hash(0, 1, 2, parameter_set=table) == hash(0, 1, 2)


class TestEngineCache:
    """Concrete engines live on the table that built them."""

    def test_engine_reused_per_table(self, table) -> None:
        """The same table and rate give the same engine object."""
        assert permutation_for(2, parameter_set=table) is permutation_for(2, parameter_set=table)

    def test_fresh_tables_do_not_accumulate(self) -> None:
        """Hashing with throwaway tables leaves no engines behind."""
        assert not hasattr(sponge, "_concrete_permutation")
        refs = []
        for _ in range(5):
            params = ParameterSet.derived()
            hash(0, 1, parameter_set=params)
            assert len(params._engines) == 1
            refs.append(weakref.ref(params))
            del params
        gc.collect()
        assert all(ref() is None for ref in refs)

    def test_circuit_context_not_cached(self) -> None:
        """Only concrete engines are stored on the table."""
        params = ParameterSet.derived()
        ctx = CircuitContext(ConstraintSystem(P))
        permutation_for(3, ctx, params)
        assert params._engines == {}


class TestPublicApi:
    """Package-level exports."""

    def test_hash_not_star_exported(self) -> None:
        """A star import must not replace the builtin hash."""
        assert "hash" not in poseidon377.__all__
        assert "hash" not in poseidon377.protocol.__all__
        namespace = {}
        exec("from poseidon377 import *", namespace)
        assert "hash" not in namespace
        assert "hash7" in namespace

    def test_hash_importable_by_name(self) -> None:
        assert poseidon377.hash is sponge.hash
        assert poseidon377.hash(0, 1) == hash1(0, 1)


@pytest.mark.published_params
class TestKnownAnswers:
    """Penumbra_TestVec vectors; need the published table."""

    EXPECTED = {
        1: 2337838243217876174544784248400816541933405738836087430664765452605435675740,
        2: 4318449279293553393006719276941638490334729643330833590842693275258805886300,
        3: 2884734248868891876687246055367204388444877057000108043377667455104051576315,
        4: 5235431038142849831913898188189800916077016298531443239266169457588889298166,
        5: 66948599770858083122195578203282720327054804952637730715402418442993895152,
        6: 6797655301930638258044003960605211404784492298673033525596396177265014216269,
    }

    @pytest.mark.parametrize("rate", range(1, 7))
    def test_vector(self, test_vector_domain, test_vector_inputs, rate: int) -> None:
        digest = HASH_N[rate - 1](test_vector_domain, *test_vector_inputs[:rate])
        assert int(digest) == self.EXPECTED[rate]
