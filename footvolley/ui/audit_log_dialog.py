from __future__ import annotations

from PySide6.QtGui import QStandardItem, QStandardItemModel
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableView,
    QVBoxLayout,
)

from footvolley.services.audit_log import EVENT_TYPES, AuditLogService

LEVEL_OPTIONS = [
    ("Todos os níveis", ""),
    ("Info", "info"),
    ("Aviso", "warning"),
    ("Erro", "error"),
]

LIMIT_OPTIONS = [
    ("Últimos 100", 100),
    ("Últimos 500", 500),
    ("Todos", 0),
]


class AuditLogDialog(QDialog):
    def __init__(self, audit_log_service: AuditLogService, parent=None) -> None:
        super().__init__(parent)
        self._audit_log_service = audit_log_service
        self.setWindowTitle("Histórico de operações")
        self.resize(820, 480)

        layout = QVBoxLayout(self)

        filter_row = QHBoxLayout()
        self._type_filter = QComboBox(self)
        self._type_filter.addItem("Todos os tipos", "")
        for event_type in EVENT_TYPES:
            self._type_filter.addItem(event_type, event_type)
        self._type_filter.currentIndexChanged.connect(self._refresh)

        self._level_filter = QComboBox(self)
        for label, value in LEVEL_OPTIONS:
            self._level_filter.addItem(label, value)
        self._level_filter.currentIndexChanged.connect(self._refresh)

        self._limit_filter = QComboBox(self)
        for label, value in LIMIT_OPTIONS:
            self._limit_filter.addItem(label, value)
        self._limit_filter.currentIndexChanged.connect(self._refresh)

        self._search_input = QLineEdit(self)
        self._search_input.setPlaceholderText("Buscar por título e detalhes")
        self._search_input.textChanged.connect(self._refresh)

        filter_row.addWidget(QLabel("Tipo:", self))
        filter_row.addWidget(self._type_filter)
        filter_row.addWidget(self._level_filter)
        filter_row.addWidget(self._search_input)
        filter_row.addWidget(self._limit_filter)
        layout.addLayout(filter_row)

        self._table = QTableView(self)
        self._table.setSortingEnabled(False)
        self._table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        layout.addWidget(self._table)

        buttons_row = QHBoxLayout()
        self._count_label = QLabel("", self)
        export_btn = QPushButton("Exportar histórico em TXT", self)
        export_btn.clicked.connect(self._export_log)
        close_btn = QPushButton("Fechar", self)
        close_btn.clicked.connect(self.accept)

        buttons_row.addWidget(self._count_label)
        buttons_row.addStretch(1)
        buttons_row.addWidget(export_btn)
        buttons_row.addWidget(close_btn)
        layout.addLayout(buttons_row)

        self._refresh()

    def _refresh(self) -> None:
        events = self._audit_log_service.list_events(
            event_type=self._selected_event_type(),
            query=self._search_input.text().strip(),
            level=self._selected_level(),
            limit=self._selected_limit(),
        )
        model = QStandardItemModel(self)
        model.setHorizontalHeaderLabels(["Data", "Nível", "Tipo", "Título", "Detalhes"])
        for event in events:
            model.appendRow(
                [
                    QStandardItem(event.created_at),
                    QStandardItem(event.level.upper()),
                    QStandardItem(event.event_type),
                    QStandardItem(event.title),
                    QStandardItem(event.details),
                ]
            )
        self._table.setModel(model)
        self._table.resizeColumnsToContents()
        self._count_label.setText(f"Registros: {len(events)}")

    def _selected_event_type(self) -> str | None:
        value = self._type_filter.currentData()
        return str(value) if value else None

    def _selected_level(self) -> str | None:
        value = self._level_filter.currentData()
        return str(value) if value else None

    def _selected_limit(self) -> int | None:
        value = self._limit_filter.currentData()
        return int(value) if value else None

    def _export_log(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Exportar histórico",
            "historico.txt",
            "Text Files (*.txt)",
        )
        if not path:
            return

        try:
            exported = self._audit_log_service.export_txt(
                path,
                event_type=self._selected_event_type(),
                query=self._search_input.text().strip(),
                level=self._selected_level(),
            )
        except OSError as exc:
            QMessageBox.critical(self, "Histórico", str(exc))
            return

        QMessageBox.information(self, "Histórico", f"Exportado: {exported}")
