"""Tests for the Alea random source and rng resolution."""

import random

import pytest

from py_planar.core.alea_prng import AleaPRNG
from py_planar.utils.random import new_seed, resolve_rng


class TestAleaPRNG:
    """Test the seedable generator."""

    def test_same_seed_same_sequence(self):
        """Two generators with one seed produce identical sequences."""
        a = AleaPRNG("test_seed")
        b = AleaPRNG("test_seed")

        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_different_seeds_differ(self):
        """Different seeds produce different sequences."""
        a = AleaPRNG("seed1")
        b = AleaPRNG("seed2")

        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_values_in_unit_interval(self):
        """random() stays in [0, 1)."""
        prng = AleaPRNG(42)
        values = [prng.random() for _ in range(1000)]

        assert all(0 <= v < 1 for v in values)

    def test_randrange_bounds(self):
        """randrange(n) yields integers in [0, n)."""
        prng = AleaPRNG("range")
        values = [prng.randrange(7) for _ in range(200)]

        assert all(isinstance(v, int) and 0 <= v < 7 for v in values)
        assert set(values) == set(range(7))

    def test_randrange_rejects_empty_range(self):
        """A non-positive stop is an error."""
        with pytest.raises(ValueError):
            AleaPRNG("r").randrange(0)

    def test_shuffle_is_permutation(self):
        """Shuffling reorders in place and keeps every element."""
        prng = AleaPRNG("shuffle")
        items = list(range(50))

        result = prng.shuffle(items)

        assert result is items
        assert sorted(items) == list(range(50))
        assert items != list(range(50))

    def test_shuffle_reproducible(self):
        """One seed always gives the same permutation."""
        assert AleaPRNG("s").shuffle(list(range(30))) == AleaPRNG("s").shuffle(list(range(30)))

    def test_shuffle_short_lists(self):
        """Empty and single-item lists come back unchanged."""
        prng = AleaPRNG("short")

        assert prng.shuffle([]) == []
        assert prng.shuffle(["only"]) == ["only"]


class TestResolveRng:
    """Test picking the random source for a build."""

    def test_injected_rng_wins(self):
        """An explicit rng is used as-is."""
        rng = random.Random(1)

        resolved, seed = resolve_rng(rng, seed="ignored")

        assert resolved is rng

    def test_seeded_alea(self):
        """A seed builds an Alea generator from that seed."""
        resolved, seed = resolve_rng(seed="abc")

        assert isinstance(resolved, AleaPRNG)
        assert seed == "abc"
        assert resolved.random() == AleaPRNG("abc").random()

    def test_fresh_seed_when_none_given(self):
        """With neither rng nor seed, a fresh 8-character seed is drawn."""
        resolved, seed = resolve_rng()

        assert isinstance(resolved, AleaPRNG)
        assert isinstance(seed, str) and len(seed) == 8

    def test_new_seed_varies(self):
        """Fresh seeds differ between calls."""
        assert new_seed() != new_seed()
