"""
Spreadsheet export of the raw goal collection.

Reads every goal (no view filtering), one row per goal in collection order:

    Date        Goal        Status
    2024-03-10  Run 5k      Completed

The workbook is built in memory and returned as bytes so the router can
stream it straight back as a download.
"""
from __future__ import annotations

import io
from datetime import date
from typing import Iterable

import xlsxwriter

from app.services.goal_store import Goal

SHEET_NAME = "Goals"
COLUMNS = ("Date", "Goal", "Status")
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def goal_rows(goals: Iterable[Goal]) -> list[tuple[str, str, str]]:
    return [
        (g.date.isoformat(), g.title, "Completed" if g.completed else "Pending")
        for g in goals
    ]


def export_filename(today: date | None = None) -> str:
    return f"goals-tracker-{(today or date.today()).isoformat()}.xlsx"


def build_workbook(goals: Iterable[Goal]) -> bytes:
    buf = io.BytesIO()
    workbook = xlsxwriter.Workbook(buf, {"in_memory": True})
    try:
        sheet = workbook.add_worksheet(SHEET_NAME)
        header = workbook.add_format({"bold": True})
        sheet.write_row(0, 0, COLUMNS, header)
        for row_index, row in enumerate(goal_rows(goals), start=1):
            # write_string: a title such as "=1+1" must stay text, not become a formula
            for col_index, value in enumerate(row):
                sheet.write_string(row_index, col_index, value)
        sheet.set_column(0, 0, 12)
        sheet.set_column(1, 1, 40)
        sheet.set_column(2, 2, 12)
    finally:
        workbook.close()
    return buf.getvalue()
