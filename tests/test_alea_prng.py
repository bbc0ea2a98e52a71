"""Tests for the Alea PRNG."""

import pytest

from py_spp.core.alea_prng import AleaPRNG
from py_spp.utils.random import create_prng, resolve_seed


class TestAleaPRNG:
    """Test the generator itself."""

    def test_same_seed_same_sequence(self):
        """Two generators with one seed draw identical values."""
        a = AleaPRNG("maze")
        b = AleaPRNG("maze")
        assert [a.random() for _ in range(50)] == [b.random() for _ in range(50)]

    def test_different_seeds_differ(self):
        """Different seeds should not produce the same sequence."""
        a = AleaPRNG("seed1")
        b = AleaPRNG("seed2")
        assert [a.random() for _ in range(10)] != [b.random() for _ in range(10)]

    def test_unit_interval(self):
        """Test that draws stay in [0, 1)."""
        prng = AleaPRNG(42)
        for _ in range(1000):
            value = prng.random()
            assert 0.0 <= value < 1.0

    def test_call_count(self):
        """Test that every draw is counted."""
        prng = AleaPRNG("count")
        for _ in range(7):
            prng.random()
        assert prng.call_count == 7

    def test_sequence_seed(self):
        """Sequence seeds are accepted and deterministic."""
        a = AleaPRNG(["a", 1])
        b = AleaPRNG(["a", 1])
        assert a.random() == b.random()

    def test_randrange(self):
        """Test that randrange covers its range and rejects an empty one."""
        prng = AleaPRNG("range")
        values = {prng.randrange(3) for _ in range(200)}
        assert values == {0, 1, 2}
        with pytest.raises(ValueError):
            prng.randrange(0)

    def test_choice(self):
        """Test that choice picks from the sequence and rejects an empty one."""
        prng = AleaPRNG("choice")
        assert prng.choice([5]) == 5
        with pytest.raises(IndexError):
            prng.choice([])

    def test_shuffled_is_permutation(self):
        """Shuffling keeps every element and leaves the input untouched."""
        prng = AleaPRNG("shuffle")
        items = list(range(10))
        shuffled = prng.shuffled(items)
        assert sorted(shuffled) == items
        assert items == list(range(10))


class TestSeedHelpers:
    """Test seed resolution."""

    def test_explicit_seed_kept(self):
        """Test that a given seed is kept as a string."""
        assert resolve_seed("abc") == "abc"
        assert resolve_seed(12) == "12"

    def test_missing_seed_generated(self):
        """Test that a missing seed is replaced by a short generated one."""
        seed = resolve_seed(None)
        assert isinstance(seed, str)
        assert len(seed) == 8

    def test_create_prng_matches_alea(self):
        """Test that create_prng builds an Alea generator for the seed."""
        assert create_prng("x").random() == AleaPRNG("x").random()
