"""Tests for roster actions."""

from rummystar.game.models import Player
from rummystar.game.roster import (
    add_player,
    delete_player,
    rename_player,
    set_double_round,
    set_preferences,
    set_score,
    toggle_player,
)
from rummystar.utils.constants import (
    ENTRY_PROHIBITED,
    INACTIVE_PLAYER,
    INVALID_NAME,
    INVALID_PREFERENCE,
    INVALID_SCORE,
    PROTECTED_PLAYER,
    UNKNOWN_PLAYER,
)
from tests.conftest import checked, make_session

HIGH_ROUNDS = [{"a": 80, "b": 0}, {"a": 80, "b": 0}, {"a": 40, "b": 0}]


class TestAddPlayer:
    def test_adds_and_checks(self):
        session = make_session([checked("a"), checked("b")], rounds=[{"a": 30, "b": 0}])
        result = add_player(session, "  Anu ")
        assert result.success
        player = result.session.players[-1]
        assert player.name == "Anu"
        assert player.is_checked
        assert not player.is_default
        assert player.override_total == 30
        assert player.joined_at == 1
        assert len(player.id) == 36

    def test_blank_name(self):
        result = add_player(make_session(), "   ")
        assert not result.success
        assert result.error_code == INVALID_NAME

    def test_blocked_entry_still_adds_unchecked(self):
        session = make_session([checked("a"), checked("b")], rounds=HIGH_ROUNDS)
        result = add_player(session, "Late")
        assert result.success
        player = result.session.players[-1]
        assert not player.is_checked
        assert player.override_total is None
        assert result.session.entry_prohibited
        blocked = [e for e in result.events if e["event"] == "entry_blocked"]
        assert blocked[0]["reason"] == ENTRY_PROHIBITED

    def test_latched_prohibition_blocks(self):
        session = make_session([checked("a")], entry_prohibited=True)
        result = add_player(session, "Late")
        assert not result.session.players[-1].is_checked


class TestRenameAndDelete:
    def test_rename(self):
        session = make_session([Player(id="a", name="A")])
        result = rename_player(session, "a", "Alpha")
        assert result.session.get_player("a").name == "Alpha"

    def test_rename_blank(self):
        result = rename_player(make_session([Player(id="a", name="A")]), "a", "")
        assert result.error_code == INVALID_NAME

    def test_rename_unknown(self):
        assert rename_player(make_session(), "zz", "Z").error_code == UNKNOWN_PLAYER

    def test_delete(self):
        session = make_session([Player(id="a", name="A"), Player(id="b", name="B")])
        result = delete_player(session, "a")
        assert [p.id for p in result.session.players] == ["b"]

    def test_default_player_protected(self):
        session = make_session([Player(id="1", name="Rajesh", is_default=True)])
        result = delete_player(session, "1")
        assert not result.success
        assert result.error_code == PROTECTED_PLAYER


class TestTogglePlayer:
    def test_uncheck_clears_score_and_override(self):
        session = make_session([checked("a", 20, override_total=50)])
        result = toggle_player(session, "a")
        a = result.session.get_player("a")
        assert not a.is_checked
        assert a.score is None
        assert a.override_total is None

    def test_check_in_seeds_total(self):
        session = make_session(
            [checked("a"), checked("b"), Player(id="c", name="C")],
            rounds=[{"a": 0, "b": 45}, {"a": 10, "b": 0}],
        )
        result = toggle_player(session, "c")
        c = result.session.get_player("c")
        assert c.is_checked
        assert c.override_total == 45
        assert c.joined_at == 2
        assert result.events[0]["seed_score"] == 45

    def test_re_entry_after_elimination(self):
        session = make_session(
            [checked("a"), checked("b"), Player(id="c", name="C", is_out=True)],
            rounds=[{"a": 0, "b": 20, "c": 80}, {"a": 0, "b": 20, "c": 80}, {"a": 5, "b": 0, "c": 80}],
        )
        result = toggle_player(session, "c")
        c = result.session.get_player("c")
        assert c.is_checked
        assert not c.is_out
        assert c.override_total == 40

    def test_blocked_at_compel_latches(self):
        session = make_session(
            [checked("a"), checked("b"), Player(id="c", name="C")], rounds=HIGH_ROUNDS
        )
        result = toggle_player(session, "c")
        assert not result.success
        assert result.error_code == ENTRY_PROHIBITED
        assert result.session.entry_prohibited
        assert not result.session.get_player("c").is_checked
        assert not session.entry_prohibited

    def test_blocked_by_latch_returns_input(self):
        session = make_session([Player(id="c", name="C")], entry_prohibited=True)
        result = toggle_player(session, "c")
        assert result.error_code == ENTRY_PROHIBITED
        assert result.session is session

    def test_unknown(self):
        assert toggle_player(make_session(), "zz").error_code == UNKNOWN_PLAYER


class TestSetScore:
    def test_sets_score(self):
        session = make_session([checked("a"), checked("b"), checked("c")])
        result = set_score(session, "a", 25)
        assert result.session.get_player("a").score == 25
        assert result.session.get_player("b").score is None

    def test_infers_winner(self):
        session = make_session([checked("a"), checked("b")])
        result = set_score(session, "a", 5)
        assert result.session.get_player("b").score == 0
        assert result.events[-1] == {"event": "winner_inferred", "player_id": "b"}

    def test_infers_after_each_edit(self):
        session = make_session([checked("a"), checked("b"), checked("c")])
        session = set_score(session, "a", 5).session
        assert session.get_player("c").score is None
        session = set_score(session, "b", 12).session
        assert session.get_player("c").score == 0

    def test_no_inference_with_explicit_zero(self):
        session = make_session([checked("a"), checked("b"), checked("c")])
        session = set_score(session, "a", 0).session
        session = set_score(session, "b", 12).session
        assert session.get_player("c").score is None

    def test_clear_score(self):
        session = make_session([checked("a", 5), checked("b", 0)])
        result = set_score(session, "a", None)
        assert result.session.get_player("a").score is None

    def test_inactive_player(self):
        session = make_session([Player(id="a", name="A")])
        assert set_score(session, "a", 5).error_code == INACTIVE_PLAYER

    def test_negative_rejected(self):
        session = make_session([checked("a")])
        assert set_score(session, "a", -1).error_code == INVALID_SCORE


class TestSessionFlags:
    def test_double_round(self):
        assert set_double_round(make_session(), True).session.double_round

    def test_preferences(self):
        result = set_preferences(make_session(), theme="ocean", history_view_mode="grid")
        assert result.session.theme == "ocean"
        assert result.session.history_view_mode == "grid"
        assert result.session.hide_default_players

    def test_unknown_theme(self):
        assert set_preferences(make_session(), theme="neon").error_code == INVALID_PREFERENCE
