"""Tests for data models."""

from rummystar.game.models import Player, RoundRecord, Session, Thresholds


class TestPlayer:
    def test_to_dict_keys(self):
        player = Player(id="a", name="A", is_checked=True, score=12, override_total=30, joined_at=2)
        assert player.to_dict() == {
            "id": "a",
            "name": "A",
            "isDefault": False,
            "isChecked": True,
            "score": 12,
            "isOut": False,
            "overrideTotalScoreForIsOut": 30,
            "joinedAtGameIndex": 2,
        }

    def test_from_dict_defaults(self):
        player = Player.from_dict({"id": 5, "name": "E", "isOut": None, "joinedAtGameIndex": None})
        assert player.id == "5"
        assert not player.is_out
        assert player.joined_at == 0
        assert player.score is None

    def test_is_active(self):
        assert Player(id="a", name="A", is_checked=True).is_active
        assert not Player(id="a", name="A", is_checked=True, is_out=True).is_active
        assert not Player(id="a", name="A").is_active

    def test_new_ids_unique(self):
        assert Player.new_player_id() != Player.new_player_id()


class TestRoundRecord:
    def test_round_trip(self):
        record = RoundRecord(name="Game 3", scores={"a": 0, "b": 17})
        assert RoundRecord.from_dict(record.to_dict()) == record


class TestSession:
    def test_get_player(self):
        session = Session(players=[Player(id="a", name="A")])
        assert session.get_player("a").name == "A"
        assert session.get_player("b") is None

    def test_active_players(self):
        session = Session(players=[
            Player(id="a", name="A", is_checked=True),
            Player(id="b", name="B"),
            Player(id="c", name="C", is_checked=True, is_out=True),
        ])
        assert [p.id for p in session.get_active_players()] == ["a"]

    def test_to_dict_snapshot_keys(self):
        data = Session(thresholds=Thresholds(300, 276, 25)).to_dict()
        assert set(data) == {
            "version", "users", "gameHistory", "gameCounter", "isRummyRound",
            "isEntryProhibitedGlobally", "theme", "hideDefaultUsers", "outLimit",
            "compelPoint", "scootPoint", "timestamp", "historyViewMode",
        }
        assert data["outLimit"] == 300
        assert data["gameCounter"] == 1
