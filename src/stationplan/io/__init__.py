# stationplan/io - Input/output handling
from .csv_loader import TeamImportResult, load_team, merge_team, save_team, team_to_csv, team_to_dataframe
from .schedule_export import (
    build_schedule_matrix,
    export_filename,
    export_schedule_to_csv,
    export_schedule_to_excel,
    schedule_to_csv,
)

__all__ = [
    "load_team",
    "save_team",
    "merge_team",
    "team_to_csv",
    "team_to_dataframe",
    "TeamImportResult",
    "build_schedule_matrix",
    "schedule_to_csv",
    "export_schedule_to_csv",
    "export_schedule_to_excel",
    "export_filename",
]
