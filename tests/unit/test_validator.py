"""Tests for round validation and winner inference."""

from rummystar.game.models import Player
from rummystar.game.validator import infer_winner, max_score, validate_round
from rummystar.utils.constants import EMPTY_ROSTER, INVALID_SCORE, WINNER_COUNT
from tests.conftest import checked


class TestMaxScore:
    def test_default(self):
        assert max_score(False) == 80

    def test_double_round(self):
        assert max_score(True) == 160


class TestValidateRound:
    def test_valid_round(self):
        result = validate_round([checked("a", 0), checked("b", 40)], False)
        assert result.valid
        assert result.scores == {"a": 0, "b": 40}

    def test_no_players(self):
        result = validate_round([], False)
        assert not result.valid
        assert result.error_code == EMPTY_ROSTER

    def test_missing_score(self):
        result = validate_round([checked("a", 0), checked("b")], False)
        assert result.error_code == INVALID_SCORE

    def test_score_over_max(self):
        result = validate_round([checked("a", 0), checked("b", 81)], False)
        assert result.error_code == INVALID_SCORE

    def test_double_round_allows_160(self):
        assert validate_round([checked("a", 0), checked("b", 160)], True).valid
        result = validate_round([checked("a", 0), checked("b", 161)], True)
        assert result.error_code == INVALID_SCORE

    def test_negative_score(self):
        result = validate_round([checked("a", 0), checked("b", -5)], False)
        assert result.error_code == INVALID_SCORE

    def test_eliminated_player_invalid(self):
        result = validate_round([checked("a", 0), checked("b", 10, is_out=True)], False)
        assert result.error_code == INVALID_SCORE

    def test_no_winner(self):
        result = validate_round([checked("a", 5), checked("b", 40)], False)
        assert result.error_code == WINNER_COUNT

    def test_two_winners(self):
        result = validate_round([checked("a", 0), checked("b", 0), checked("c", 9)], False)
        assert result.error_code == WINNER_COUNT

    def test_score_range_checked_before_winner_count(self):
        result = validate_round([checked("a", 5), checked("b", 99)], False)
        assert result.error_code == INVALID_SCORE

    def test_never_valid_without_exactly_one_zero(self):
        for scores in ([1, 2, 3], [0, 0, 3], [0, 0, 0], [80, 80]):
            players = [checked(f"p{i}", s) for i, s in enumerate(scores)]
            assert not validate_round(players, False).valid


class TestInferWinner:
    def test_last_unscored_player_wins(self):
        assert infer_winner([checked("a", 5), checked("b")]) == "b"

    def test_needs_more_than_one_player(self):
        assert infer_winner([checked("a")]) is None

    def test_not_when_zero_already_entered(self):
        assert infer_winner([checked("a", 0), checked("b"), checked("c", 4)]) is None

    def test_not_when_two_unscored(self):
        assert infer_winner([checked("a", 5), checked("b"), checked("c")]) is None

    def test_not_when_all_scored(self):
        assert infer_winner([checked("a", 5), checked("b", 7)]) is None

    def test_inactive_players_ignored_by_caller(self):
        players = [checked("a", 5), checked("b"), Player(id="c", name="C")]
        active = [p for p in players if p.is_active]
        assert infer_winner(active) == "b"
