from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

MIN_LEVEL = 1
MAX_LEVEL = 10
EMPTY_PLAYER_ID = "empty"

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    level: int

    @property
    def is_empty(self) -> bool:
        return self.id == EMPTY_PLAYER_ID

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "level": self.level}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Player":
        """Build a player from a stored record.

        Raises ``ValueError`` when the record lacks an id or a name.
        """
        player_id = record.get("id")
        name = record.get("name")
        if player_id is None or str(player_id) == "":
            raise ValueError("Registro de jogador sem id.")
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Registro de jogador {player_id} sem nome.")
        return cls(id=str(player_id), name=name.strip(), level=parse_level(record.get("level")))


EMPTY_PLAYER = Player(id=EMPTY_PLAYER_ID, name="", level=0)


def clamp_level(level: int) -> int:
    """Clamp a level to the 1..10 range."""
    return min(MAX_LEVEL, max(MIN_LEVEL, level))


def parse_level(value: object) -> int:
    """Coerce user input into a valid level.

    Text is read up to its leading integer ("7.5" -> 7, "12abc" -> 12).
    Anything without a leading integer, and zero, becomes 1; the result is
    then clamped to 1..10.
    """
    if value is None or isinstance(value, bool):
        return MIN_LEVEL
    if isinstance(value, (int, float)):
        try:
            parsed = int(value)
        except (OverflowError, ValueError):
            return MIN_LEVEL
    else:
        match = _LEADING_INT_RE.match(str(value).strip())
        if match is None:
            return MIN_LEVEL
        parsed = int(match.group(0))
    return clamp_level(parsed or MIN_LEVEL)


def normalize_name(name: object) -> str:
    if name is None:
        raise ValueError("Informe o nome do jogador.")
    text = str(name).strip()
    if not text:
        raise ValueError("Informe o nome do jogador.")
    return text


def sort_by_level_desc(players: list[Player]) -> list[Player]:
    return sorted(players, key=lambda player: -player.level)
