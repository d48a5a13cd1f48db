from __future__ import annotations

import logging
import random
from typing import Callable, Sequence

from footvolley.domain.players import Player
from footvolley.domain.teams import (
    MIN_PLAYERS_FOR_DRAW,
    NotEnoughPlayersError,
    Team,
    displaced_players,
    draw_teams,
)
from footvolley.services.audit_log import DRAW_TEAMS, AuditLogService
from footvolley.settings import DEFAULT_DRAW_DELAY_MS

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


class DrawInProgressError(RuntimeError):
    def __init__(self) -> None:
        super().__init__("Um sorteio já está em andamento.")


class DrawService:
    """Runs one draw at a time after a short delay.

    The scheduler receives the delay in milliseconds and a callback to run
    once it expires; the desktop UI passes ``QTimer.singleShot``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        delay_ms: int = DEFAULT_DRAW_DELAY_MS,
        rng: random.Random | None = None,
        audit_log: AuditLogService | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._delay_ms = delay_ms
        self._rng = rng or random.Random()
        self._audit_log = audit_log
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @delay_ms.setter
    def delay_ms(self, value: int) -> None:
        if value < 0:
            raise ValueError("O atraso do sorteio não pode ser negativo.")
        self._delay_ms = int(value)

    def request_draw(
        self,
        players: Sequence[Player],
        on_finished: Callable[[list[Team]], None],
    ) -> None:
        """Schedule a draw for a snapshot of *players*.

        Raises ``DrawInProgressError`` while a previous draw is pending and
        ``NotEnoughPlayersError`` for rosters with fewer than two players.
        """
        if self._busy:
            raise DrawInProgressError()
        if len(players) < MIN_PLAYERS_FOR_DRAW:
            raise NotEnoughPlayersError(len(players))

        snapshot = list(players)
        self._busy = True
        logger.debug("Draw scheduled for %d players in %d ms", len(snapshot), self._delay_ms)
        try:
            self._scheduler(self._delay_ms, lambda: self._run(snapshot, on_finished))
        except Exception:
            self._busy = False
            raise

    def _run(self, players: list[Player], on_finished: Callable[[list[Team]], None]) -> None:
        try:
            teams = draw_teams(players, self._rng)
        finally:
            self._busy = False
        self._log_draw(players, teams)
        on_finished(teams)

    def _log_draw(self, players: list[Player], teams: list[Team]) -> None:
        dropped = displaced_players(players, teams)
        if dropped:
            logger.info("Draw left out: %s", ", ".join(player.name for player in dropped))
        if self._audit_log is None:
            return
        self._audit_log.log_event(
            DRAW_TEAMS,
            "Sorteio de duplas",
            f"Jogadores: {len(players)}; duplas: {len(teams)}",
            context={
                "players": len(players),
                "teams": [
                    [team.player1.id, team.player2.id, team.team_level] for team in teams
                ],
                "left_out": [player.id for player in dropped],
            },
        )
