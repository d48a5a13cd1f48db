from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from footvolley.domain.teams import Team

TEAM_COLUMNS = ["Time", "Jogador 1", "Nível 1", "Jogador 2", "Nível 2", "Nível do time"]
VACANT_LABEL = "VAGO"


def team_rows(teams: Sequence[Team]) -> list[list[object]]:
    rows: list[list[object]] = []
    for index, team in enumerate(teams, start=1):
        if team.has_vacancy:
            player2_name: object = VACANT_LABEL
            player2_level: object = None
        else:
            player2_name = team.player2.name
            player2_level = team.player2.level
        rows.append(
            [
                index,
                team.player1.name,
                team.player1.level,
                player2_name,
                player2_level,
                team.team_level,
            ]
        )
    return rows


class ExportService:
    def export_teams_xlsx(self, path: str | Path, teams: Sequence[Team]) -> Path:
        output_path = Path(path)
        self.export_dataset_xlsx(
            str(output_path),
            header_lines=[
                "Times Sorteados",
                f"Data: {self.format_date_label()}",
                f"Duplas: {len(teams)}",
            ],
            columns=TEAM_COLUMNS,
            rows=team_rows(teams),
        )
        return output_path

    def export_dataset_xlsx(
        self,
        path: str,
        header_lines: Iterable[str],
        columns: Sequence[str],
        rows: Sequence[Sequence[object]],
    ) -> None:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Duplas"

        current_row = 1
        for line in header_lines:
            sheet.cell(row=current_row, column=1, value=line)
            current_row += 1

        header_row = current_row
        header_fill = PatternFill(start_color="15803D", end_color="15803D", fill_type="solid")
        for column, header_text in enumerate(columns, start=1):
            cell = sheet.cell(row=header_row, column=column, value=header_text)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.fill = header_fill

        current_row += 1
        alignment = Alignment(horizontal="left", vertical="top")
        for row in rows:
            for column, value in enumerate(row, start=1):
                cell = sheet.cell(row=current_row, column=column, value=value)
                cell.alignment = alignment
            current_row += 1

        sheet.freeze_panes = f"A{header_row + 1}"

        for column_index in range(1, len(columns) + 1):
            max_length = len(str(columns[column_index - 1]))
            for row_index in range(header_row + 1, current_row):
                value = sheet.cell(row=row_index, column=column_index).value
                if value is None:
                    continue
                max_length = max(max_length, len(str(value)))
            sheet.column_dimensions[get_column_letter(column_index)].width = min(max_length + 2, 40)

        workbook.save(path)

    @staticmethod
    def format_date_label() -> str:
        return date.today().strftime("%d/%m/%Y")
