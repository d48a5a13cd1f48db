from __future__ import annotations

import json
import logging
import uuid
from dataclasses import replace
from typing import Callable

from footvolley.db.storage import KeyValueStorage
from footvolley.domain.players import Player, normalize_name, parse_level, sort_by_level_desc
from footvolley.services.audit_log import (
    ADD_PLAYER,
    CLEAR_ROSTER,
    DELETE_PLAYER,
    EDIT_PLAYER,
    AuditLogService,
)
from footvolley.settings import ROSTER_STORAGE_KEY

logger = logging.getLogger(__name__)


def _new_player_id() -> str:
    return uuid.uuid4().hex


class RosterStore:
    """Current roster, persisted as a JSON record list under one storage key."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = ROSTER_STORAGE_KEY,
        id_factory: Callable[[], str] = _new_player_id,
        audit_log: AuditLogService | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._id_factory = id_factory
        self._audit_log = audit_log
        self._players: list[Player] = self._load()

    def __len__(self) -> int:
        return len(self._players)

    def list(self) -> list[Player]:
        return list(self._players)

    def list_by_level(self) -> list[Player]:
        return sort_by_level_desc(self._players)

    def get(self, player_id: str) -> Player | None:
        for player in self._players:
            if player.id == player_id:
                return player
        return None

    def add(self, name: str, level: object) -> Player:
        player = Player(id=self._id_factory(), name=normalize_name(name), level=parse_level(level))
        self._commit([*self._players, player])
        self._log(ADD_PLAYER, "Jogador adicionado", f"{player.name} (nível {player.level})", player)
        return player

    def update(self, player_id: str, name: str, level: object) -> None:
        index = self._index_of(player_id)
        if index is None:
            logger.debug("Update ignored: player %s not in roster", player_id)
            return
        updated = replace(self._players[index], name=normalize_name(name), level=parse_level(level))
        players = list(self._players)
        players[index] = updated
        self._commit(players)
        self._log(EDIT_PLAYER, "Jogador editado", f"{updated.name} (nível {updated.level})", updated)

    def remove(self, player_id: str) -> None:
        player = self.get(player_id)
        if player is None:
            logger.debug("Remove ignored: player %s not in roster", player_id)
            return
        self._commit([item for item in self._players if item.id != player_id])
        self._log(DELETE_PLAYER, "Jogador excluído", player.name, player)

    def clear(self) -> None:
        removed = len(self._players)
        self._commit([])
        if self._audit_log is not None:
            self._audit_log.log_event(
                CLEAR_ROSTER,
                "Lista de jogadores limpa",
                f"Jogadores removidos: {removed}",
                context={"removed": removed},
            )

    def _load(self) -> list[Player]:
        raw = self._storage.get(self._key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Erro ao carregar jogadores: %s", exc)
            return []
        if not isinstance(data, list):
            logger.warning("Erro ao carregar jogadores: expected a list, got %s", type(data).__name__)
            return []

        players: list[Player] = []
        seen_ids: set[str] = set()
        for index, record in enumerate(data):
            if not isinstance(record, dict):
                logger.warning("Skipping stored player #%d: not a record", index)
                continue
            try:
                player = Player.from_record(record)
            except ValueError as exc:
                logger.warning("Skipping stored player #%d: %s", index, exc)
                continue
            if player.id in seen_ids:
                logger.warning("Skipping stored player #%d: duplicate id %s", index, player.id)
                continue
            seen_ids.add(player.id)
            players.append(player)
        logger.debug("Loaded %d players from storage key %s", len(players), self._key)
        return players

    def _index_of(self, player_id: str) -> int | None:
        for index, player in enumerate(self._players):
            if player.id == player_id:
                return index
        return None

    def _commit(self, players: list[Player]) -> None:
        # Memory only follows a successful write.
        payload = json.dumps([player.to_record() for player in players], ensure_ascii=False)
        self._storage.set(self._key, payload)
        self._players = players

    def _log(self, event_type: str, title: str, details: str, player: Player) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log_event(event_type, title, details, context=player.to_record())
