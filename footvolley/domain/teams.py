from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from footvolley.domain.players import Player

MIN_PLAYERS_FOR_DRAW = 2
NOT_ENOUGH_PLAYERS_MESSAGE = "É necessário pelo menos 2 jogadores para formar duplas"


class NotEnoughPlayersError(ValueError):
    """Raised when a draw is requested with fewer than two players."""

    def __init__(self, players_count: int) -> None:
        super().__init__(NOT_ENOUGH_PLAYERS_MESSAGE)
        self.players_count = players_count


@dataclass
class Team:
    player1: Player
    player2: Player
    team_level: int

    @classmethod
    def pair(cls, player1: Player, player2: Player) -> "Team":
        return cls(player1=player1, player2=player2, team_level=player1.level + player2.level)

    @property
    def has_vacancy(self) -> bool:
        return self.player2.is_empty


def _best_team_index(teams: list[Team], level: int) -> int:
    best_index = 0
    best_diff = abs(teams[0].team_level - level)
    for index, team in enumerate(teams[1:], start=1):
        diff = abs(team.team_level - level)
        if diff < best_diff:
            best_index = index
            best_diff = diff
    return best_index


def form_teams(players: Sequence[Player], rng: random.Random | None = None) -> list[Team]:
    """Pair players into teams of two, lowest level with highest level.

    The roster is shuffled and then stable-sorted by level, so players with
    the same level are ordered differently on each draw. With an odd roster
    the highest sorted player is left over and replaces ``player2`` of the
    team whose level is closest to the leftover's level (the replaced player
    is not returned). A lone player fills both slots of a single team.
    """
    rng = rng or random.Random()
    shuffled = list(players)
    rng.shuffle(shuffled)
    remaining = sorted(shuffled, key=lambda player: player.level)

    leftover = remaining.pop() if len(remaining) % 2 else None

    teams: list[Team] = []
    while remaining:
        low = remaining.pop(0)
        high = remaining.pop()
        teams.append(Team.pair(low, high))

    if leftover is not None:
        if teams:
            best = teams[_best_team_index(teams, leftover.level)]
            best.player2 = leftover
            best.team_level = best.player1.level + leftover.level
        else:
            teams.append(Team.pair(leftover, leftover))

    return teams


def draw_teams(players: Sequence[Player], rng: random.Random | None = None) -> list[Team]:
    """Run a draw for the given roster; at least two players are required."""
    if len(players) < MIN_PLAYERS_FOR_DRAW:
        raise NotEnoughPlayersError(len(players))
    return form_teams(players, rng)


def displaced_players(players: Sequence[Player], teams: Sequence[Team]) -> list[Player]:
    """Return roster players that ended up in no team slot."""
    placed = {team.player1.id for team in teams} | {team.player2.id for team in teams}
    return [player for player in players if player.id not in placed]
