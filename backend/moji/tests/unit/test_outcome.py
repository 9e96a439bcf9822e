import pytest

from moji.logic.enums import ResultType
from moji.logic.outcome import (
    SCORE_THRESHOLDS,
    SPECIAL_THRESHOLDS,
    generate_result,
    score_for_roll,
    select_outcome,
)
from moji.tests.helpers import ScriptedStream


class TestSpecialBranch:
    def test_special_win_from_low_roll(self):
        stream = ScriptedStream([0.005])
        result = select_outcome(stream)

        assert result.type == ResultType.SPECIAL_WIN
        assert result.rows == 0
        assert result.score == "0"
        assert result.is_special is True
        assert result.is_fail is False
        assert stream.used == 1

    def test_special_fail_does_not_count_as_fail(self):
        stream = ScriptedStream([0.0125])
        result = select_outcome(stream)

        assert result.type == ResultType.SPECIAL_FAIL
        assert result.rows == 7
        assert result.score == "7"
        assert result.is_fail is False
        assert stream.used == 1

    def test_star_draws_row_count(self):
        stream = ScriptedStream([0.03, 0.5])
        result = select_outcome(stream)

        assert result.type == ResultType.SPECIAL_STAR
        assert result.rows == 4
        assert result.score == "⭐"
        assert stream.used == 2

    def test_bulb_score_is_row_count(self):
        stream = ScriptedStream([0.0499, 0.99])
        result = select_outcome(stream)

        assert result.type == ResultType.SPECIAL_BULB
        assert result.rows == 6
        assert result.score == "6"
        assert stream.used == 2

    def test_finale_rows_lower_bound(self):
        result = select_outcome(ScriptedStream([0.04, 0.0]))
        assert result.rows == 1

    def test_special_thresholds_are_contiguous(self):
        bounds = [upper for upper, _ in SPECIAL_THRESHOLDS]
        assert bounds == sorted(bounds)
        assert bounds[-1] == 0.05


class TestNormalBranch:
    @pytest.mark.parametrize(
        ("roll", "score"),
        [
            (0.0, "1"),
            (0.0299, "1"),
            (0.03, "2"),
            (0.11, "3"),
            (0.31, "4"),
            (0.61, "5"),
            (0.81, "6"),
            (0.93, "X"),
            (0.999999, "X"),
        ],
    )
    def test_score_thresholds_are_left_inclusive(self, roll, score):
        assert score_for_roll(roll) == score

    def test_fail_outcome(self):
        stream = ScriptedStream([0.5, 0.95])
        result = select_outcome(stream)

        assert result.type == ResultType.FAIL
        assert result.score == "X"
        assert result.rows == 6
        assert result.is_fail is True
        assert result.is_special is False
        assert stream.used == 2

    def test_win_rows_match_score(self):
        result = select_outcome(ScriptedStream([0.05, 0.5]))

        assert result.type == ResultType.WIN
        assert result.score == "4"
        assert result.rows == 4
        assert result.is_fail is False

    def test_score_table_ends_at_one(self):
        bounds = [upper for upper, _ in SCORE_THRESHOLDS]
        assert bounds == sorted(bounds)
        assert bounds[-1] == 1.0


class TestGenerateResult:
    @pytest.mark.parametrize(
        ("puzzle_index", "result_type", "score", "rows"),
        [
            (1, ResultType.WIN, "3", 3),
            (2, ResultType.WIN, "4", 4),
            (16, ResultType.FAIL, "X", 6),
            (28, ResultType.SPECIAL_STAR, "⭐", 3),
            (147, ResultType.SPECIAL_FAIL, "7", 7),
            (181, ResultType.SPECIAL_BULB, "1", 1),
            (223, ResultType.SPECIAL_WIN, "0", 0),
        ],
    )
    def test_reference_outcomes(self, puzzle_index, result_type, score, rows):
        """Outcomes for known puzzle numbers never change."""
        result = generate_result(puzzle_index)
        assert result.type == result_type
        assert result.score == score
        assert result.rows == rows

    def test_deterministic(self):
        for index in range(1, 200):
            assert generate_result(index) == generate_result(index)

    def test_row_count_bounds(self):
        expected_rows = {
            ResultType.SPECIAL_WIN: {0},
            ResultType.SPECIAL_FAIL: {7},
            ResultType.SPECIAL_STAR: set(range(1, 7)),
            ResultType.SPECIAL_BULB: set(range(1, 7)),
            ResultType.WIN: set(range(1, 7)),
            ResultType.FAIL: {6},
        }
        for index in range(1, 2001):
            result = generate_result(index)
            assert result.rows in expected_rows[result.type]
            assert result.is_fail == (result.type == ResultType.FAIL)

    def test_every_outcome_type_occurs(self):
        seen = {generate_result(index).type for index in range(1, 3001)}
        assert seen == set(ResultType)
