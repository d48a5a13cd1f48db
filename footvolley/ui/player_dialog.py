from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from footvolley.domain.players import MAX_LEVEL, MIN_LEVEL, Player


class PlayerDialog(QDialog):
    def __init__(self, player: Player | None = None, parent=None) -> None:
        super().__init__(parent)
        self._editing = player is not None
        self.setWindowTitle("Editar Jogador" if self._editing else "Adicionar Novo Jogador")
        self.resize(380, 160)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.name_edit = QLineEdit(self)
        self.name_edit.setPlaceholderText("Digite o nome do jogador")
        self.level_spin = QSpinBox(self)
        self.level_spin.setRange(MIN_LEVEL, MAX_LEVEL)
        self.level_spin.setValue(MIN_LEVEL)

        if player is not None:
            self.name_edit.setText(player.name)
            self.level_spin.setValue(player.level)

        form.addRow("Nome do Jogador", self.name_edit)
        form.addRow(f"Nível do Jogador ({MIN_LEVEL}-{MAX_LEVEL})", self.level_spin)
        layout.addLayout(form)

        button_box = QDialogButtonBox(self)
        submit_btn = QPushButton("Salvar" if self._editing else "Adicionar", self)
        cancel_btn = QPushButton("Cancelar", self)
        button_box.addButton(submit_btn, QDialogButtonBox.ButtonRole.AcceptRole)
        button_box.addButton(cancel_btn, QDialogButtonBox.ButtonRole.RejectRole)
        submit_btn.clicked.connect(self._on_submit)
        cancel_btn.clicked.connect(self.reject)
        layout.addWidget(button_box)

    def values(self) -> tuple[str, int]:
        return self.name_edit.text().strip(), int(self.level_spin.value())

    def _on_submit(self) -> None:
        name, _ = self.values()
        if not name:
            QMessageBox.warning(self, self.windowTitle(), "Informe o nome do jogador.")
            return
        self.accept()
