import pytest

from moji.logic.enums import ResultType, Tile
from moji.logic.grid import generate_grid
from moji.logic.outcome import generate_result
from moji.logic.share import format_grid_row, format_score, format_share_text, parse_grid_row, streak_line
from moji.tests.helpers import fail, make_result, win


class TestFormatScore:
    @pytest.mark.parametrize(
        ("result", "expected"),
        [
            (win(4), "4/6"),
            (fail(), "X/6"),
            (make_result(ResultType.SPECIAL_WIN, "0", 0), "0/6"),
            (make_result(ResultType.SPECIAL_FAIL, "7", 7), "7/6"),
            (make_result(ResultType.SPECIAL_STAR, "⭐", 2), "⭐/6"),
            (make_result(ResultType.SPECIAL_BULB, "1", 1), "1/💡"),
        ],
    )
    def test_labels(self, result, expected):
        assert format_score(result) == expected


class TestStreakLine:
    def test_shown_above_one(self):
        assert streak_line(3, win()) == "🔥 3 day streak"

    def test_hidden_for_first_day(self):
        assert streak_line(1, win()) == ""

    def test_hidden_on_fail(self):
        assert streak_line(5, fail()) == ""


class TestFormatShareText:
    def test_puzzle_one_reference(self):
        result = generate_result(1)
        grid = generate_grid(1, result)

        assert format_share_text(1, result, grid, 1) == "Moji #1 3/6\n\n🟨🟨🟩🟦🟨\n🟩⬜🟦🟦🟪\n🟦🟦🟦🟦🟦"

    def test_streak_appended_after_blank_line(self):
        grid = [["green"] * 5, ["blue"] * 5]
        text = format_share_text(42, win(2), grid, 3)

        assert text == "Moji #42 2/6\n\n🟩🟩🟩🟩🟩\n🟦🟦🟦🟦🟦\n\n🔥 3 day streak"

    def test_special_win_has_no_grid_lines(self):
        result = make_result(ResultType.SPECIAL_WIN, "0", 0)
        assert format_share_text(223, result, [], 1) == "Moji #223 0/6"

    def test_fail_never_shows_streak(self):
        grid = [["empty"] * 5] * 6
        text = format_share_text(16, fail(), grid, 0)

        assert text.startswith("Moji #16 X/6\n\n")
        assert "🔥" not in text
        assert len(text.splitlines()) == 8

    def test_star_and_bulb_finales(self):
        star = format_share_text(28, make_result(ResultType.SPECIAL_STAR, "⭐", 1), [["star"] * 5], 1)
        bulb = format_share_text(181, make_result(ResultType.SPECIAL_BULB, "1", 1), [["lightbulb"] * 5], 1)

        assert star == "Moji #28 ⭐/6\n\n⭐⭐⭐⭐⭐"
        assert bulb == "Moji #181 1/💡\n\n💡💡💡💡💡"

    def test_unknown_tile_renders_blank(self):
        assert format_grid_row(["green", "sparkle", "blue", "", "purple"]) == "🟩⬜🟦⬜🟪"

    def test_chaos_symbols(self):
        assert format_grid_row(["bluecircle", "orange", "star", "lightbulb", "yellow"]) == "🔵🟠⭐💡🟨"


class TestParseGridRow:
    def test_recovers_tiles(self):
        grid = generate_grid(1, generate_result(16))
        text = format_share_text(16, generate_result(16), grid, 0)
        rows = text.splitlines()[2:]

        assert [parse_grid_row(line) for line in rows] == [[Tile(tile) for tile in row] for row in grid]

    def test_rejects_foreign_symbol(self):
        with pytest.raises(ValueError, match="Unknown tile symbol"):
            parse_grid_row("🟩🟥🟩🟩🟩")
