from __future__ import annotations

import logging
import sqlite3

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QInputDialog, QMainWindow, QMessageBox, QStackedWidget

from footvolley.db.storage import SqliteKeyValueStorage
from footvolley.domain.teams import NotEnoughPlayersError, Team
from footvolley.services.audit_log import AuditLogService
from footvolley.services.draw_service import DrawInProgressError, DrawService
from footvolley.services.roster_store import RosterStore
from footvolley.settings import get_draw_delay_ms, set_draw_delay_ms
from footvolley.ui.audit_log_dialog import AuditLogDialog
from footvolley.ui.players_view import PlayersView
from footvolley.ui.teams_view import TeamsView

logger = logging.getLogger(__name__)


def _qt_scheduler(delay_ms: int, callback) -> None:
    QTimer.singleShot(delay_ms, callback)


class MainWindow(QMainWindow):
    def __init__(self, connection: sqlite3.Connection) -> None:
        super().__init__()
        self.setWindowTitle("Duplas de Futevôlei")
        self.setMinimumSize(720, 520)

        self._audit_log_service = AuditLogService(connection)
        self._roster = RosterStore(
            SqliteKeyValueStorage(connection),
            audit_log=self._audit_log_service,
        )
        self._draw_service = DrawService(
            _qt_scheduler,
            delay_ms=get_draw_delay_ms(),
            audit_log=self._audit_log_service,
        )

        self._stack = QStackedWidget(self)
        self._players_view = PlayersView(
            self._roster,
            on_draw=self._start_draw,
            on_show_log=self._show_audit_log,
            on_configure_delay=self._configure_draw_delay,
            parent=self._stack,
        )
        self._teams_view = TeamsView(
            on_back=self._show_players,
            on_new_draw=self._start_draw,
            audit_log_service=self._audit_log_service,
            parent=self._stack,
        )
        self._stack.addWidget(self._players_view)
        self._stack.addWidget(self._teams_view)
        self.setCentralWidget(self._stack)

    def _start_draw(self) -> None:
        try:
            self._draw_service.request_draw(self._roster.list(), self._on_draw_finished)
        except NotEnoughPlayersError as exc:
            QMessageBox.warning(self, "Sortear", str(exc))
            return
        except DrawInProgressError:
            logger.debug("Draw request ignored: another draw is pending")
            return
        self._set_busy(True)

    def _on_draw_finished(self, teams: list[Team]) -> None:
        self._set_busy(False)
        self._teams_view.set_teams(teams)
        self._stack.setCurrentWidget(self._teams_view)

    def _set_busy(self, busy: bool) -> None:
        self._players_view.set_busy(busy)
        self._teams_view.set_busy(busy)

    def _show_players(self) -> None:
        self._players_view.refresh()
        self._stack.setCurrentWidget(self._players_view)

    def _show_audit_log(self) -> None:
        AuditLogDialog(self._audit_log_service, parent=self).exec()

    def _configure_draw_delay(self) -> None:
        delay_ms, accepted = QInputDialog.getInt(
            self,
            "Atraso do sorteio",
            "Atraso (ms):",
            self._draw_service.delay_ms,
            0,
            10_000,
            100,
        )
        if not accepted:
            return
        try:
            set_draw_delay_ms(delay_ms)
        except OSError as exc:
            QMessageBox.critical(self, "Atraso do sorteio", str(exc))
            return
        self._draw_service.delay_ms = delay_ms
