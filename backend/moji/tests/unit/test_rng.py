"""
Unit tests for the seeded generator.

Covers Mulberry32 determinism, seed reduction, output range, stream
derivation, and reference vector regression tests.
"""

from moji.logic.rng import (
    GRID_SEED_MULTIPLIER,
    OUTCOME_SEED_MULTIPLIER,
    Mulberry32,
    grid_rng,
    outcome_rng,
)


class TestMulberry32:
    def test_deterministic(self):
        """Same seed produces the same output sequence."""
        rng1 = Mulberry32(42)
        rng2 = Mulberry32(42)
        for _ in range(100):
            assert rng1.next() == rng2.next()

    def test_reference_vector(self):
        """Fixed seed yields exact expected outputs (regression guard).

        These values are what every shared and persisted result was built
        from; any change to the constants or the mixing steps breaks them.
        """
        rng = Mulberry32(12345)
        assert [rng.next() for _ in range(5)] == [
            0.9797282677609473,
            0.3067522644996643,
            0.484205421525985,
            0.817934412509203,
            0.5094283693470061,
        ]

    def test_reference_vector_zero_seed(self):
        rng = Mulberry32(0)
        assert [rng.next() for _ in range(3)] == [
            0.26642920868471265,
            0.0003297457005828619,
            0.2232720274478197,
        ]

    def test_seed_reduced_modulo_2_32(self):
        wrapped = Mulberry32(2**32 + 7)
        plain = Mulberry32(7)
        for _ in range(10):
            assert wrapped.next() == plain.next()

    def test_negative_seed_is_valid(self):
        negative = Mulberry32(-1)
        unsigned = Mulberry32(2**32 - 1)
        for _ in range(10):
            assert negative.next() == unsigned.next()

    def test_outputs_in_unit_interval(self):
        rng = Mulberry32(987654321)
        for _ in range(10_000):
            value = rng.next()
            assert 0.0 <= value < 1.0

    def test_uint32_and_float_agree(self):
        a = Mulberry32(99)
        b = Mulberry32(99)
        for _ in range(20):
            assert a.next_uint32() / 2**32 == b.next()

    def test_different_seeds_different_output(self):
        assert Mulberry32(1).next() != Mulberry32(2).next()

    def test_iteration_continues_the_stream(self):
        rng = Mulberry32(5)
        first = rng.next()
        iterator = iter(rng)
        second = next(iterator)

        fresh = Mulberry32(5)
        assert [fresh.next(), fresh.next()] == [first, second]

    def test_roughly_uniform(self):
        """Mean of many draws is close to 0.5."""
        rng = Mulberry32(2024)
        n = 20_000
        mean = sum(rng.next() for _ in range(n)) / n
        assert abs(mean - 0.5) < 0.01


class TestStreamDerivation:
    def test_outcome_stream_uses_index_multiplier(self):
        assert outcome_rng(1).next() == Mulberry32(OUTCOME_SEED_MULTIPLIER).next()
        assert outcome_rng(7).next() == Mulberry32(7 * OUTCOME_SEED_MULTIPLIER).next()

    def test_grid_stream_uses_grid_multiplier(self):
        assert grid_rng(3).next() == Mulberry32(3 * GRID_SEED_MULTIPLIER).next()

    def test_outcome_and_grid_streams_differ_for_same_base(self):
        assert outcome_rng(10).next() != grid_rng(10).next()

    def test_large_timestamp_seed_is_accepted(self):
        rng = grid_rng(1_700_000_000_000)
        assert 0.0 <= rng.next() < 1.0
