from __future__ import annotations

from typing import Callable, Sequence

from PySide6.QtWidgets import (
    QFileDialog,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from footvolley.domain.players import Player
from footvolley.domain.teams import Team
from footvolley.services.audit_log import ERROR, EXPORT_FILE, AuditLogService
from footvolley.services.export_service import VACANT_LABEL, ExportService

CARDS_PER_ROW = 3


class TeamsView(QWidget):
    def __init__(
        self,
        on_back: Callable[[], None],
        on_new_draw: Callable[[], None],
        audit_log_service: AuditLogService,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._teams: list[Team] = []
        self._export_service = ExportService()
        self._audit_log_service = audit_log_service

        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        header.addWidget(QLabel("<h2>Times Sorteados</h2>", self))
        header.addStretch(1)
        back_btn = QPushButton("Voltar", self)
        self.export_btn = QPushButton("Exportar XLSX", self)
        self.new_draw_btn = QPushButton("Sortear Novamente", self)
        back_btn.clicked.connect(on_back)
        self.export_btn.clicked.connect(self._export_teams)
        self.new_draw_btn.clicked.connect(on_new_draw)
        header.addWidget(back_btn)
        header.addWidget(self.export_btn)
        header.addWidget(self.new_draw_btn)
        layout.addLayout(header)

        self._cards_host = QWidget(self)
        self._cards_grid = QGridLayout(self._cards_host)
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._cards_host)
        layout.addWidget(scroll)

    def set_teams(self, teams: Sequence[Team]) -> None:
        self._teams = list(teams)
        while self._cards_grid.count():
            item = self._cards_grid.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        for index, team in enumerate(self._teams):
            row, column = divmod(index, CARDS_PER_ROW)
            self._cards_grid.addWidget(self._build_card(index + 1, team), row, column)
        self.export_btn.setEnabled(bool(self._teams))

    def set_busy(self, busy: bool) -> None:
        self.new_draw_btn.setEnabled(not busy)
        self.new_draw_btn.setText("Sorteando..." if busy else "Sortear Novamente")
        self._cards_host.setEnabled(not busy)

    def _build_card(self, number: int, team: Team) -> QGroupBox:
        card = QGroupBox(f"Time {number} (Nível: {team.team_level})", self._cards_host)
        card_layout = QVBoxLayout(card)
        card_layout.addWidget(QLabel(self.slot_text(1, team.player1), card))
        card_layout.addWidget(QLabel(self.slot_text(2, team.player2), card))
        return card

    @staticmethod
    def slot_text(slot: int, player: Player) -> str:
        if player.is_empty:
            return f"{slot}. <span style='color:gray'>{VACANT_LABEL}</span>"
        return f"{slot}. <b>{player.name}</b> - Nível: {player.level}"

    def _export_teams(self) -> None:
        if not self._teams:
            return
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Exportar duplas",
            "duplas.xlsx",
            "Excel Files (*.xlsx)",
        )
        if not path:
            return
        try:
            exported = self._export_service.export_teams_xlsx(path, self._teams)
        except OSError as exc:
            self._audit_log_service.log_event(
                ERROR,
                "Erro ao exportar duplas",
                str(exc),
                level="error",
                context={"path": path},
            )
            QMessageBox.critical(self, "Exportar duplas", str(exc))
            return
        self._audit_log_service.log_event(
            EXPORT_FILE,
            "Exportação de duplas",
            f"Duplas: {len(self._teams)}; arquivo: {exported}",
            context={"path": str(exported)},
        )
        QMessageBox.information(self, "Exportar duplas", f"Pronto: {exported}")
