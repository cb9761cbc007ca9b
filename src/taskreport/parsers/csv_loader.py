"""
Reader for the task CSV export.

Main API:
    load_table(path)    → (header, records)
    load_records(path)  → List[Dict[str, str]]

The export has a single known shape: one header row, comma separated, UTF-8
with an optional BOM. Every cell is read as a string; blank lines are skipped.
A row with more cells than the header is a broken export. A short row is
padded with empty cells, since spreadsheet tools drop trailing empty cells.
"""

import io
import logging
from pathlib import Path
from typing import Dict, List, Tuple, Union

import pandas as pd

from taskreport.models.report import LoadErrorKind

log = logging.getLogger(__name__)

Record = Dict[str, str]


class CsvLoadError(Exception):
    """The CSV file is missing or cannot be parsed."""

    def __init__(self, kind: LoadErrorKind, path: Path, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path


def _is_blank(row: List[str]) -> bool:
    return not any(cell.strip() for cell in row)


def _read_rows(content: str, path: Path) -> List[List[str]]:
    """All non-blank rows, header included, as lists of strings."""
    try:
        frame = pd.read_csv(
            io.StringIO(content),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise CsvLoadError(LoadErrorKind.CSV_PARSE_ERROR, path, f"{path} has no header row") from e
    except pd.errors.ParserError as e:
        raise CsvLoadError(LoadErrorKind.CSV_PARSE_ERROR, path, f"Invalid CSV in {path}: {e}") from e

    rows = frame.fillna("").values.tolist()
    return [row for row in rows if not _is_blank(row)]


def parse_csv_table(content: str, path: Path = Path("<string>")) -> Tuple[List[str], List[Record]]:
    """
    Parse CSV text into its header and header-keyed records.

    The header is returned even when there are no data rows.

    Raises:
        CsvLoadError: CSV_PARSE_ERROR on malformed content
    """
    if content.startswith("\ufeff"):
        content = content[1:]

    rows = _read_rows(content, path)
    if not rows:
        raise CsvLoadError(LoadErrorKind.CSV_PARSE_ERROR, path, f"{path} has no header row")

    header = [h.strip() for h in rows[0]]
    seen = set()
    for name in header:
        if name and name in seen:
            raise CsvLoadError(
                LoadErrorKind.CSV_PARSE_ERROR, path, f"Duplicate column '{name}' in {path}"
            )
        seen.add(name)

    return header, [dict(zip(header, row)) for row in rows[1:]]


def parse_csv_text(content: str, path: Path = Path("<string>")) -> List[Record]:
    """Parse CSV text into header-keyed records."""
    return parse_csv_table(content, path)[1]


def load_table(path: Union[str, Path]) -> Tuple[List[str], List[Record]]:
    """
    Read the CSV export at ``path`` into its header and records.

    Raises:
        CsvLoadError: CSV_NOT_FOUND if the file is missing or unreadable,
            CSV_PARSE_ERROR if it cannot be decoded or parsed
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        raise CsvLoadError(LoadErrorKind.CSV_NOT_FOUND, path, f"{path} not found: {e}") from e
    except UnicodeDecodeError as e:
        raise CsvLoadError(
            LoadErrorKind.CSV_PARSE_ERROR, path, f"{path} is not valid UTF-8: {e}"
        ) from e
    except OSError as e:
        raise CsvLoadError(LoadErrorKind.CSV_NOT_FOUND, path, f"Cannot read {path}: {e}") from e

    header, records = parse_csv_table(content, path)
    log.info("Loaded %d records from %s", len(records), path)
    return header, records


def load_records(path: Union[str, Path]) -> List[Record]:
    """Read the CSV export at ``path``; see load_table for the errors raised."""
    return load_table(path)[1]
