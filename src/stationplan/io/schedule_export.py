"""
Schedule Export
===============
Station × shift matrix export to CSV (Excel friendly) and to an Excel
workbook with a statistics sheet.
"""
import io
from datetime import date
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from stationplan.models.person import Person, Station
from stationplan.models.schedule import Assignment
from stationplan.models.shift import SHIFTS, WEEKDAY_SHORT_DE, ShiftType
from stationplan.solver.stats import calculate_person_stats, stats_to_dataframe
from stationplan.utils.logging_setup import get_logger

logger = get_logger("stationplan.io.schedule_export")

SEPARATOR = ";"
BOM = "\ufeff"
EMPTY_CELL = "-"
UNKNOWN = "Unbekannt"

SHIFT_COLORS = {
    ShiftType.EARLY: "DDEEFF",
    ShiftType.LATE: "FFE4CC",
}
THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)


def date_header(iso_date: str) -> str:
    """Column header for a date, e.g. ``Mo. 05.01``."""
    d = date.fromisoformat(iso_date)
    return f"{WEEKDAY_SHORT_DE[d.weekday()]} {d:%d.%m}"


def build_schedule_matrix(
    assignments: Sequence[Assignment],
    persons: Sequence[Person],
    stations: Sequence[Station],
) -> pd.DataFrame:
    """
    Build the station × shift by date matrix.

    Rows: one early and one late row per station (station name on the early
    row only). Columns: Station, Zeit, then one column per date in
    chronological order. Cells list the assigned names, ``-`` when empty.
    """
    names = {p.id: p.name for p in persons}
    dates = sorted({a.date for a in assignments})
    headers = [date_header(d) for d in dates]
    col_of = dict(zip(dates, headers))

    cells = {
        (s.id, shift): {h: [] for h in headers}
        for s in stations for shift in SHIFTS
    }
    for a in assignments:
        key = (a.station_id, a.shift)
        if key not in cells:
            continue
        cells[key][col_of[a.date]].append(names.get(a.person_id, UNKNOWN))

    rows = []
    for s in stations:
        for shift in SHIFTS:
            row = {
                "Station": s.name if shift is ShiftType.EARLY else "",
                "Zeit": shift.label,
            }
            for h in headers:
                row[h] = ", ".join(cells[(s.id, shift)][h]) or EMPTY_CELL
            rows.append(row)

    return pd.DataFrame(rows, columns=["Station", "Zeit"] + headers)


def schedule_to_csv(
    assignments: Sequence[Assignment],
    persons: Sequence[Person],
    stations: Sequence[Station],
) -> str:
    """
    Render the schedule matrix as CSV text.

    Semicolon separated, CRLF line endings and a UTF-8 BOM so spreadsheet
    applications pick up umlauts correctly.

    Raises:
        ValueError: if there are no assignments
    """
    if not assignments:
        raise ValueError("No assignments to export")

    df = build_schedule_matrix(assignments, persons, stations)
    if df.empty:
        raise ValueError("No stations with assignments to export")

    buffer = io.StringIO()
    buffer.write(BOM)
    df.to_csv(buffer, sep=SEPARATOR, index=False, lineterminator="\r\n")
    return buffer.getvalue()


def export_schedule_to_csv(
    assignments: Sequence[Assignment],
    persons: Sequence[Person],
    stations: Sequence[Station],
    output: Union[str, Path, TextIO],
) -> None:
    """Export the schedule matrix as CSV to a path or text buffer."""
    content = schedule_to_csv(assignments, persons, stations)
    if isinstance(output, (str, Path)):
        with open(output, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
    else:
        output.write(content)

    days = len({a.date for a in assignments})
    logger.info(f"CSV export: {len(stations) * len(SHIFTS)} rows with {days} days")


def export_filename(assignments: Sequence[Assignment], today: Optional[date] = None) -> str:
    """Descriptive file name: ``Stationsplan_<first>-<last>_<today>.csv``."""
    today = today or date.today()
    dates = sorted({a.date for a in assignments})
    first = dates[0].replace("-", "") if dates else ""
    last = dates[-1].replace("-", "") if dates else ""
    return f"Stationsplan_{first}-{last}_{today:%Y%m%d}.csv"


def _style_matrix_sheet(ws, n_rows: int, n_cols: int) -> None:
    for c in range(1, n_cols + 1):
        cell = ws.cell(row=1, column=c)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center")
        ws.column_dimensions[get_column_letter(c)].width = 18 if c > 2 else 16

    for r in range(2, n_rows + 2):
        shift = SHIFTS[(r - 2) % len(SHIFTS)]
        fill = PatternFill("solid", start_color=SHIFT_COLORS[shift])
        for c in range(1, n_cols + 1):
            cell = ws.cell(row=r, column=c)
            cell.border = BORDER_THIN
            cell.alignment = Alignment(wrap_text=True, vertical="center")
            if c > 1:
                cell.fill = fill
        ws.cell(row=r, column=1).font = Font(bold=True)

    ws.freeze_panes = "C2"


def export_schedule_to_excel(
    assignments: Sequence[Assignment],
    persons: Sequence[Person],
    stations: Sequence[Station],
    output: Union[str, Path, io.BytesIO],
) -> None:
    """
    Export schedule to an Excel workbook.

    Sheets:
        Plan: station × shift matrix
        Statistik: per-person early/late/total and per-station counts

    Raises:
        ValueError: if there are no assignments
    """
    if not assignments:
        raise ValueError("No assignments to export")

    matrix = build_schedule_matrix(assignments, persons, stations)
    stats = stats_to_dataframe(calculate_person_stats(assignments, persons, stations), stations)

    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        matrix.to_excel(writer, sheet_name="Plan", index=False)
        stats.to_excel(writer, sheet_name="Statistik", index=False)

        _style_matrix_sheet(writer.sheets["Plan"], len(matrix), len(matrix.columns))
        stats_ws = writer.sheets["Statistik"]
        for c in range(1, len(stats.columns) + 1):
            stats_ws.cell(row=1, column=c).font = Font(bold=True)
            stats_ws.column_dimensions[get_column_letter(c)].width = 16

    logger.info(f"Excel export: {len(assignments)} assignments, {len(persons)} persons")
