from pathlib import Path

from footvolley.db.database import get_connection
from footvolley.services.audit_log import ADD_PLAYER, DRAW_TEAMS, ERROR, AuditLogService


def test_log_event_writes_and_filters_records(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "app.db")
    service = AuditLogService(connection)

    service.log_event(ADD_PLAYER, "Jogador adicionado", "Ana (nível 4)", context={"id": "a"})
    service.log_event(DRAW_TEAMS, "Sorteio de duplas", "Jogadores: 4; duplas: 2", level="warning")

    all_events = service.list_events()
    assert len(all_events) == 2
    assert all_events[0].event_type == DRAW_TEAMS

    add_events = service.list_events(event_type=ADD_PLAYER)
    assert len(add_events) == 1
    assert add_events[0].details == "Ana (nível 4)"
    assert add_events[0].context == {"id": "a"}

    search_events = service.list_events(query="duplas")
    assert len(search_events) == 1
    assert search_events[0].level == "warning"


def test_broken_context_json_reads_as_empty(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "app.db")
    service = AuditLogService(connection)
    event_id = service.log_event(ERROR, "Falha", "detalhes", level="error")
    with connection:
        connection.execute("UPDATE audit_log SET context_json = ? WHERE id = ?", ("{oops", event_id))

    event = service.list_events()[0]
    assert event.context == {}
    assert event.level == "error"


def test_export_log_creates_txt_file(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "app.db")
    service = AuditLogService(connection)

    service.log_event(ADD_PLAYER, "Jogador adicionado", "Bia (nível 7)")
    output_path = service.export_txt(tmp_path / "historico.txt")

    assert output_path.exists()
    content = output_path.read_text(encoding="utf-8")
    assert "ADD_PLAYER" in content
    assert "Bia (nível 7)" in content


def test_list_events_filters_by_level_and_limits(tmp_path: Path) -> None:
    connection = get_connection(tmp_path / "app.db")
    service = AuditLogService(connection)

    for index in range(3):
        service.log_event(ADD_PLAYER, "Jogador adicionado", f"Jogador {index}")
    service.log_event(ERROR, "Erro ao exportar duplas", "disco cheio", level="error")

    errors = service.list_events(level="error")
    assert [event.details for event in errors] == ["disco cheio"]

    latest = service.list_events(event_type=ADD_PLAYER, limit=2)
    assert [event.details for event in latest] == ["Jogador 2", "Jogador 1"]
