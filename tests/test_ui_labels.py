from footvolley.domain.players import EMPTY_PLAYER
from footvolley.ui.players_view import player_label
from footvolley.ui.teams_view import TeamsView
from tests.helpers.roster_factory import make_player


def test_player_label_uses_plain_separator() -> None:
    assert player_label(make_player("Ana", 7)) == "Ana - Nível: 7/10"


def test_team_slot_text_shows_level_or_vacancy() -> None:
    assert TeamsView.slot_text(1, make_player("Bia", 4)) == "1. <b>Bia</b> - Nível: 4"
    assert "VAGO" in TeamsView.slot_text(2, EMPTY_PLAYER)
