"""
data.py

Responsibility: Locate and read the CSV file that supplies one record per rendered SVG.

The CSV lives next to the template and shares its base name:
`brochure.svg` -> `brochure.csv`. The first row is the header.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

Record = dict[str, str]


class DataError(ValueError):
    pass


@dataclass(frozen=True)
class DataTable:
    """Header and data rows of a CSV file."""

    columns: list[str]
    records: list[Record]


def data_path_for(template: str | Path) -> Path:
    return Path(template).with_suffix(".csv")


def load_table(path: str | Path) -> DataTable:
    """
    Read the header and every data row of the CSV at `path`.

    - Keys keep the header's column order.
    - Short rows are padded with empty strings; long rows are an error.
    - Rows with only empty cells are skipped with a warning.
    """
    p = Path(path)
    if not p.is_file():
        raise DataError(f"Data file does not exist: {p}")

    records: list[Record] = []
    with p.open(encoding="utf-8-sig", newline="") as fh:
        reader = csv.DictReader(fh, restval="")
        try:
            header = reader.fieldnames
        except csv.Error as e:
            raise DataError(f"Malformed CSV header in {p}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataError(f"Data file is not valid UTF-8: {p}") from e
        if not header:
            raise DataError(f"Data file has no header row: {p}")

        dupes = sorted({name for name in header if header.count(name) > 1})
        if dupes:
            raise DataError(f"Duplicate column(s) in {p}: {', '.join(dupes)}")

        try:
            for row in reader:
                if None in row:
                    raise DataError(
                        f"Line {reader.line_num} of {p} has {len(header) + len(row[None])} cells, "
                        f"expected at most {len(header)}"
                    )
                if not any(v.strip() for v in row.values()):
                    logger.warning("Skipping line %d of %s: every cell is empty", reader.line_num, p)
                    continue
                records.append(dict(row))
        except csv.Error as e:
            raise DataError(f"Malformed CSV in {p} at line {reader.line_num}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataError(f"Data file is not valid UTF-8: {p} (after line {reader.line_num})") from e

    logger.debug("Loaded %d record(s) from %s", len(records), p)
    return DataTable(columns=list(header), records=records)


def load_records(path: str | Path) -> list[Record]:
    """Return only the data rows of the CSV at `path`."""
    return load_table(path).records


def check_fields(columns: Iterable[str], fields: Iterable[str]) -> None:
    """
    Raise a DataError naming every field that is not one of `columns`.
    """
    known = set(columns)
    missing = [f for f in fields if f not in known]
    if missing:
        raise DataError(
            f"Unknown field(s): {', '.join(missing)} (available columns: {', '.join(sorted(known)) or 'none'})"
        )
