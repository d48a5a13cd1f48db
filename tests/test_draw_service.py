from __future__ import annotations

import random
from pathlib import Path

import pytest

from footvolley.db.database import get_connection
from footvolley.domain.teams import NotEnoughPlayersError, Team
from footvolley.services.audit_log import DRAW_TEAMS, AuditLogService
from footvolley.services.draw_service import DrawInProgressError, DrawService
from tests.helpers.roster_factory import ManualScheduler, make_player, make_roster


def test_draw_runs_after_scheduled_delay() -> None:
    scheduler = ManualScheduler()
    service = DrawService(scheduler, delay_ms=250, rng=random.Random(1))
    received: list[list[Team]] = []

    service.request_draw(make_roster([1, 3, 7, 9]), received.append)

    assert service.busy
    assert [delay for delay, _ in scheduler.calls] == [250]
    assert received == []

    scheduler.fire()

    assert not service.busy
    assert len(received) == 1
    assert [team.team_level for team in received[0]] == [10, 10]


def test_second_request_is_rejected_while_draw_pending() -> None:
    scheduler = ManualScheduler()
    service = DrawService(scheduler, delay_ms=0)
    received: list[list[Team]] = []
    players = make_roster([2, 4, 6, 8])

    service.request_draw(players, received.append)
    with pytest.raises(DrawInProgressError):
        service.request_draw(players, received.append)
    assert len(scheduler.calls) == 1

    scheduler.fire()
    service.request_draw(players, received.append)
    scheduler.fire()

    assert len(received) == 2


@pytest.mark.parametrize("levels", [[], [5]])
def test_small_roster_is_rejected_before_scheduling(levels: list[int]) -> None:
    scheduler = ManualScheduler()
    service = DrawService(scheduler)

    with pytest.raises(NotEnoughPlayersError):
        service.request_draw(make_roster(levels), lambda teams: None)

    assert scheduler.calls == []
    assert not service.busy


def test_draw_uses_roster_snapshot() -> None:
    scheduler = ManualScheduler()
    service = DrawService(scheduler, rng=random.Random(3))
    received: list[list[Team]] = []
    players = make_roster([1, 9])

    service.request_draw(players, received.append)
    players.append(make_player("Late", 5))
    scheduler.fire()

    assert len(received[0]) == 1
    assert {received[0][0].player1.name, received[0][0].player2.name} == {"A", "B"}


def test_failing_scheduler_releases_busy_flag() -> None:
    def broken_scheduler(delay_ms, callback) -> None:
        raise RuntimeError("timer unavailable")

    service = DrawService(broken_scheduler)

    with pytest.raises(RuntimeError, match="timer unavailable"):
        service.request_draw(make_roster([1, 2]), lambda teams: None)

    assert not service.busy


def test_draw_is_written_to_audit_log(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "app.db")
    audit = AuditLogService(connection)
    scheduler = ManualScheduler()
    service = DrawService(scheduler, audit_log=audit, rng=random.Random(9))
    a, b, c = make_player("A", 2), make_player("B", 5), make_player("C", 8)

    service.request_draw([a, b, c], lambda teams: None)
    scheduler.fire()

    events = audit.list_events(event_type=DRAW_TEAMS)
    assert len(events) == 1
    assert events[0].details == "Jogadores: 3; duplas: 1"
    assert events[0].context["left_out"] == [b.id]
    assert events[0].context["teams"] == [[a.id, c.id, 10]]


def test_changed_delay_applies_to_next_request() -> None:
    scheduler = ManualScheduler()
    service = DrawService(scheduler, delay_ms=800)

    service.delay_ms = 120
    service.request_draw(make_roster([1, 2]), lambda _teams: None)

    assert [delay for delay, _ in scheduler.calls] == [120]
    with pytest.raises(ValueError):
        service.delay_ms = -5
    assert service.delay_ms == 120
