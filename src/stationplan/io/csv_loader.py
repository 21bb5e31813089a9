"""CSV loading and saving for team data (semicolon separated, German headers)."""
import io
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Tuple, Union

import pandas as pd

from stationplan.models.person import Person
from stationplan.utils.logging_setup import get_logger

logger = get_logger("stationplan.io.csv_loader")

SEPARATOR = ";"
TEAM_COLUMNS = ["Vorname", "Nachname", "Ausschluss Morgen", "Ausschluss Abend"]


@dataclass
class TeamImportResult:
    """Outcome of a team import."""
    people: List[Person] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def _safe_bool(value, default: bool = False) -> bool:
    """Safely convert value to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if not key:
            return default
        return key in ("1", "true", "yes", "ja", "x")
    return default


def _find_column(header: List[str], *needles: str) -> Optional[int]:
    for idx, col in enumerate(header):
        if any(n in col for n in needles):
            return idx
    return None


def _read_frame(source: Union[str, Path, TextIO, pd.DataFrame]) -> pd.DataFrame:
    if isinstance(source, pd.DataFrame):
        frame = source.fillna("").astype(str)
        # DataFrame columns are the header row
        header = pd.DataFrame([list(frame.columns)], columns=frame.columns)
        return pd.concat([header, frame], ignore_index=True)

    if isinstance(source, (str, Path)):
        text = Path(source).read_text(encoding="utf-8-sig")
    else:
        text = source.read().lstrip("\ufeff")
    if not text.strip():
        raise pd.errors.EmptyDataError("No columns to parse from file")

    # Rows may carry more fields than the first line
    width = max(line.count(SEPARATOR) + 1 for line in text.splitlines())
    return pd.read_csv(
        io.StringIO(text),
        sep=SEPARATOR,
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
    )


def load_team(source: Union[str, Path, TextIO, pd.DataFrame]) -> TeamImportResult:
    """
    Load a team from a semicolon separated CSV file.

    The first line is treated as a header when it names a ``Vorname`` or
    ``Nachname`` column (``first``/``last`` are accepted too). Without a
    header the first two columns are first and last name. Optional
    ``Ausschluss Morgen`` / ``Ausschluss Abend`` columns set the shift
    exclusions.

    Args:
        source: Path, text buffer or DataFrame

    Returns:
        TeamImportResult with the parsed people and row-level errors

    Raises:
        ValueError: if the source cannot be parsed as CSV
    """
    try:
        df = _read_frame(source)
    except pd.errors.EmptyDataError:
        return TeamImportResult(errors=["CSV file is empty"])
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValueError(f"Failed to parse CSV: {e}") from e

    df = df.fillna("")
    if df.empty:
        return TeamImportResult(errors=["CSV file is empty"])

    header = [str(c).strip().strip('"').lower() for c in df.iloc[0]]
    has_header = any("vorname" in c or "nachname" in c for c in header)

    if has_header:
        first_idx = _find_column(header, "vorname", "first")
        last_idx = _find_column(header, "nachname", "last")
        morning_idx = _find_column(header, "ausschluss morgen", "exclude morning")
        evening_idx = _find_column(header, "ausschluss abend", "exclude evening")
        rows = df.iloc[1:]
    else:
        first_idx, last_idx, morning_idx, evening_idx = 0, 1, None, None
        rows = df

    result = TeamImportResult()
    for offset, (_, row) in enumerate(rows.iterrows()):
        row_number = offset + (2 if has_header else 1)
        values = [str(v).strip().strip('"') for v in row.tolist()]
        if not any(values):
            continue

        if first_idx is None or last_idx is None:
            result.errors.append(f"Row {row_number}: Vorname and Nachname columns not found")
            continue

        def cell(idx):
            return values[idx] if idx is not None and idx < len(values) else ""

        full_name = f"{cell(first_idx)} {cell(last_idx)}".strip()
        if not full_name:
            result.errors.append(f"Row {row_number}: Name cannot be empty")
            continue

        result.people.append(Person(
            id=str(uuid.uuid4()),
            name=full_name,
            exclude_morning_shifts=_safe_bool(cell(morning_idx)),
            exclude_evening_shifts=_safe_bool(cell(evening_idx)),
        ))

    logger.info(f"Imported {len(result.people)} persons ({len(result.errors)} errors)")
    return result


def merge_team(existing: Sequence[Person], imported: Sequence[Person]) -> Tuple[List[Person], List[str]]:
    """
    Append imported persons to a team, skipping names the team already has.

    Names are compared case-insensitively against the existing team only.

    Returns:
        (merged team, one "Skipped duplicate name" message per skipped person)
    """
    taken = {p.name.lower() for p in existing}
    merged = list(existing)
    skipped = []
    for person in imported:
        if person.name.lower() in taken:
            skipped.append(f"Skipped duplicate name: {person.name}")
            continue
        merged.append(person)
    if skipped:
        logger.info(f"Import skipped {len(skipped)} duplicate names")
    return merged, skipped


def team_to_dataframe(people: List[Person]) -> pd.DataFrame:
    """Convert team list to DataFrame in the CSV layout."""
    rows = []
    for p in people:
        first, _, last = p.name.partition(" ")
        rows.append({
            "Vorname": first,
            "Nachname": last,
            "Ausschluss Morgen": "true" if p.exclude_morning_shifts else "false",
            "Ausschluss Abend": "true" if p.exclude_evening_shifts else "false",
        })
    return pd.DataFrame(rows, columns=TEAM_COLUMNS)


def team_to_csv(people: List[Person]) -> str:
    """Render the team as semicolon separated CSV text."""
    buffer = io.StringIO()
    team_to_dataframe(people).to_csv(buffer, sep=SEPARATOR, index=False, lineterminator="\n")
    return buffer.getvalue()


def save_team(people: List[Person], path: Union[str, Path]) -> None:
    """
    Save team to CSV file.

    Args:
        people: List of Person objects
        path: Output path
    """
    Path(path).write_text(team_to_csv(people), encoding="utf-8")
