from __future__ import annotations

import logging
import sqlite3
from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from footvolley.domain.players import Player
from footvolley.domain.teams import MIN_PLAYERS_FOR_DRAW
from footvolley.services.roster_store import RosterStore
from footvolley.ui.player_dialog import PlayerDialog

logger = logging.getLogger(__name__)


def player_label(player: Player) -> str:
    return f"{player.name} - Nível: {player.level}/10"


class PlayersView(QWidget):
    def __init__(
        self,
        roster: RosterStore,
        on_draw: Callable[[], None],
        on_show_log: Callable[[], None],
        on_configure_delay: Callable[[], None],
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._roster = roster
        self._on_draw = on_draw
        self._on_show_log = on_show_log
        self._on_configure_delay = on_configure_delay
        self._busy = False

        layout = QVBoxLayout(self)
        layout.addLayout(self._build_header())

        self.players_list = QListWidget(self)
        self.players_list.itemDoubleClicked.connect(lambda _item: self._edit_selected())
        self.players_list.currentRowChanged.connect(lambda _row: self._update_buttons())
        layout.addWidget(self.players_list)

        layout.addLayout(self._build_row_actions())
        self.refresh()

    def _build_header(self) -> QHBoxLayout:
        header = QHBoxLayout()
        header.addWidget(QLabel("<h2>Lista de Jogadores</h2>", self))
        header.addStretch(1)

        self.clear_btn = QPushButton("Limpar", self)
        self.draw_btn = QPushButton("Sortear", self)
        add_btn = QPushButton("Adicionar Jogador", self)
        log_btn = QPushButton("Histórico", self)
        delay_btn = QPushButton("Atraso", self)

        self.clear_btn.clicked.connect(self._clear_players)
        self.draw_btn.clicked.connect(self._request_draw)
        add_btn.clicked.connect(self._add_player)
        log_btn.clicked.connect(self._on_show_log)
        delay_btn.clicked.connect(self._on_configure_delay)

        header.addWidget(self.clear_btn)
        header.addWidget(self.draw_btn)
        header.addWidget(add_btn)
        header.addWidget(log_btn)
        header.addWidget(delay_btn)
        return header

    def _build_row_actions(self) -> QHBoxLayout:
        actions = QHBoxLayout()
        actions.addStretch(1)
        self.edit_btn = QPushButton("Editar", self)
        self.delete_btn = QPushButton("Excluir", self)
        self.edit_btn.clicked.connect(self._edit_selected)
        self.delete_btn.clicked.connect(self._delete_selected)
        actions.addWidget(self.edit_btn)
        actions.addWidget(self.delete_btn)
        return actions

    def refresh(self) -> None:
        self.players_list.clear()
        players = self._roster.list_by_level()
        if not players:
            placeholder = QListWidgetItem("Nenhum jogador cadastrado ainda.")
            placeholder.setFlags(Qt.ItemFlag.NoItemFlags)
            self.players_list.addItem(placeholder)
        for player in players:
            item = QListWidgetItem(player_label(player))
            item.setData(Qt.ItemDataRole.UserRole, player.id)
            self.players_list.addItem(item)
        self._update_buttons()

    def set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.draw_btn.setText("Sorteando..." if busy else "Sortear")
        self._update_buttons()

    def _update_buttons(self) -> None:
        count = len(self._roster)
        self.clear_btn.setEnabled(count > 0)
        self.draw_btn.setEnabled(count >= MIN_PLAYERS_FOR_DRAW and not self._busy)
        has_selection = self._selected_player_id() is not None
        self.edit_btn.setEnabled(has_selection)
        self.delete_btn.setEnabled(has_selection)

    def _selected_player_id(self) -> str | None:
        item = self.players_list.currentItem()
        if item is None:
            return None
        value = item.data(Qt.ItemDataRole.UserRole)
        return str(value) if value else None

    def _request_draw(self) -> None:
        self._on_draw()

    def _add_player(self) -> None:
        dialog = PlayerDialog(parent=self)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return
        name, level = dialog.values()
        try:
            self._roster.add(name, level)
        except ValueError as exc:
            QMessageBox.warning(self, "Adicionar Jogador", str(exc))
            return
        except sqlite3.Error as exc:
            self._show_storage_error("Adicionar Jogador", exc)
            return
        self.refresh()

    def _edit_selected(self) -> None:
        player_id = self._selected_player_id()
        player = self._roster.get(player_id) if player_id else None
        if player is None:
            return
        dialog = PlayerDialog(player, parent=self)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return
        name, level = dialog.values()
        try:
            self._roster.update(player.id, name, level)
        except ValueError as exc:
            QMessageBox.warning(self, "Editar Jogador", str(exc))
            return
        except sqlite3.Error as exc:
            self._show_storage_error("Editar Jogador", exc)
            return
        self.refresh()

    def _delete_selected(self) -> None:
        player_id = self._selected_player_id()
        if player_id is None:
            return
        confirm = QMessageBox.question(
            self,
            "Confirmação",
            "Tem certeza que deseja excluir este jogador?",
        )
        if confirm != QMessageBox.StandardButton.Yes:
            return
        try:
            self._roster.remove(player_id)
        except sqlite3.Error as exc:
            self._show_storage_error("Excluir Jogador", exc)
            return
        self.refresh()

    def _clear_players(self) -> None:
        confirm = QMessageBox.question(
            self,
            "Confirmação",
            "Tem certeza que deseja limpar todos os jogadores?",
        )
        if confirm != QMessageBox.StandardButton.Yes:
            return
        try:
            self._roster.clear()
        except sqlite3.Error as exc:
            self._show_storage_error("Limpar", exc)
            return
        self.refresh()

    def _show_storage_error(self, title: str, exc: sqlite3.Error) -> None:
        logger.error("Erro ao salvar jogadores: %s", exc)
        QMessageBox.critical(self, title, f"Erro ao salvar jogadores: {exc}")
