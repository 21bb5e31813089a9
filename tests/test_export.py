"""Tests for schedule CSV and Excel export."""
import io
from datetime import date

import pytest
from openpyxl import load_workbook

from stationplan.io.schedule_export import (
    BOM,
    build_schedule_matrix,
    date_header,
    export_filename,
    export_schedule_to_csv,
    export_schedule_to_excel,
    schedule_to_csv,
)
from stationplan.models.person import Person, Station
from stationplan.models.schedule import Assignment
from stationplan.models.shift import ShiftType
from stationplan.solver.planner import generate


@pytest.fixture
def team():
    return [Person(id="a", name="Anna Berg"), Person(id="b", name="Ben Kurz"), Person(id="c", name="Clara Lang")]


@pytest.fixture
def two_stations():
    return [Station(id="1", name="Pool"), Station(id="2", name="Bar")]


@pytest.fixture
def assignments():
    return [
        Assignment("2026-01-06", ShiftType.EARLY, "Tuesday", "1", "a"),
        Assignment("2026-01-06", ShiftType.EARLY, "Tuesday", "1", "b"),
        Assignment("2026-01-05", ShiftType.LATE, "Monday", "2", "c"),
        Assignment("2026-01-05", ShiftType.LATE, "Monday", "1", "ghost"),
    ]


class TestScheduleMatrix:
    """Tests for the station × shift matrix."""

    def test_date_header(self):
        assert date_header("2026-01-05") == "Mo. 05.01"
        assert date_header("2026-01-10") == "Sa. 10.01"

    def test_layout(self, assignments, team, two_stations):
        df = build_schedule_matrix(assignments, team, two_stations)

        assert list(df.columns) == ["Station", "Zeit", "Mo. 05.01", "Di. 06.01"]
        assert list(df["Station"]) == ["Pool", "", "Bar", ""]
        assert list(df["Zeit"]) == ["Frühdienst", "Spätdienst", "Frühdienst", "Spätdienst"]

    def test_cells(self, assignments, team, two_stations):
        df = build_schedule_matrix(assignments, team, two_stations)

        assert df.iloc[0]["Di. 06.01"] == "Anna Berg, Ben Kurz"
        assert df.iloc[0]["Mo. 05.01"] == "-"
        assert df.iloc[1]["Mo. 05.01"] == "Unbekannt"
        assert df.iloc[3]["Mo. 05.01"] == "Clara Lang"

    def test_unknown_station_ignored(self, team, two_stations):
        stray = [Assignment("2026-01-05", ShiftType.LATE, "Monday", "99", "a")]
        df = build_schedule_matrix(stray, team, two_stations)
        assert (df["Mo. 05.01"] == "-").all()


class TestCSVExport:
    """Tests for CSV export."""

    def test_format(self, assignments, team, two_stations):
        text = schedule_to_csv(assignments, team, two_stations)

        assert text.startswith(BOM)
        lines = text[len(BOM):].split("\r\n")
        assert lines[0] == "Station;Zeit;Mo. 05.01;Di. 06.01"
        assert lines[1] == "Pool;Frühdienst;-;Anna Berg, Ben Kurz"
        assert lines[2] == ";Spätdienst;Unbekannt;-"
        assert lines[-1] == ""

    def test_empty_raises(self, team, two_stations):
        with pytest.raises(ValueError, match="No assignments"):
            schedule_to_csv([], team, two_stations)

    def test_no_stations_raises(self, assignments, team):
        with pytest.raises(ValueError, match="No stations"):
            schedule_to_csv(assignments, team, [])

    def test_export_to_file(self, assignments, team, two_stations, tmp_path):
        path = tmp_path / "plan.csv"
        export_schedule_to_csv(assignments, team, two_stations, path)

        raw = path.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        assert b"\r\n" in raw
        assert b"\r\r\n" not in raw

    def test_export_to_buffer(self, assignments, team, two_stations):
        buffer = io.StringIO()
        export_schedule_to_csv(assignments, team, two_stations, buffer)
        assert "Clara Lang" in buffer.getvalue()

    def test_export_generated_plan(self, sample_people, stations, week_config):
        result = generate(sample_people, stations, week_config, seed=11)
        text = schedule_to_csv(result.assignments, sample_people, stations)
        lines = text[len(BOM):].strip("\r\n").split("\r\n")
        assert len(lines) == 1 + len(stations) * 2
        assert lines[0].count(";") == 1 + 6


class TestExportFilename:
    """Tests for the download file name."""

    def test_filename(self, assignments):
        name = export_filename(assignments, today=date(2026, 1, 2))
        assert name == "Stationsplan_20260105-20260106_20260102.csv"

    def test_filename_without_assignments(self):
        assert export_filename([], today=date(2026, 1, 2)) == "Stationsplan_-_20260102.csv"


class TestExcelExport:
    """Tests for Excel export."""

    def test_workbook_sheets(self, assignments, team, two_stations):
        buffer = io.BytesIO()
        export_schedule_to_excel(assignments, team, two_stations, buffer)

        buffer.seek(0)
        wb = load_workbook(buffer)
        assert wb.sheetnames == ["Plan", "Statistik"]

        plan = wb["Plan"]
        assert plan.cell(row=1, column=3).value == "Mo. 05.01"
        assert plan.cell(row=2, column=1).value == "Pool"
        assert plan.cell(row=2, column=1).font.bold
        assert plan.freeze_panes == "C2"

        stats = wb["Statistik"]
        assert [c.value for c in stats[1]][:4] == ["Name", "Frühdienst", "Spätdienst", "Gesamt"]
        assert stats.cell(row=2, column=1).value == "Anna Berg"

    def test_empty_raises(self, team, two_stations, tmp_path):
        with pytest.raises(ValueError):
            export_schedule_to_excel([], team, two_stations, tmp_path / "plan.xlsx")

    def test_export_to_path(self, assignments, team, two_stations, tmp_path):
        path = tmp_path / "plan.xlsx"
        export_schedule_to_excel(assignments, team, two_stations, path)
        assert path.exists()
