from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from ..models.errors import UnsupportedSourceError
from ..models.source_table import SourceTable

"""Spreadsheet reader: .csv / .xlsx -> SourceTable.

The first physical row is the header row; everything below it is data.
Cells are read raw (CSV as text, Excel with the types openpyxl reports) so
that value formatting stays in one place (services.formatting). No NA
sentinel conversion is applied: "NA", "null" etc. stay literal strings.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "read_table",
    "list_sheets",
]

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


def _to_python(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.to_pydatetime()
    if isinstance(value, float) and value != value:
        return None
    return value


def _frame_to_table(df: pd.DataFrame, sheet_name: str | None) -> SourceTable:
    if df.shape[0] == 0:
        raise UnsupportedSourceError(f"no header row found in sheet '{sheet_name or 'csv'}'")
    records = [[_to_python(v) for v in row] for row in df.itertuples(index=False, name=None)]
    headers = ["" if h is None else h for h in records[0]]
    table = SourceTable.from_raw(headers, records[1:], sheet_name=sheet_name)
    logger.debug(
        f"read table sheet={sheet_name} headers={len(table.headers)} rows={table.total_rows}"
    )
    return table


def list_sheets(path: Path) -> list[str]:
    """Sheet names of an .xlsx workbook ([] for CSV)."""
    if path.suffix.lower() == ".csv":
        return []
    with pd.ExcelFile(path, engine="openpyxl") as xls:
        return [str(n) for n in xls.sheet_names]


def read_table(path: Path, sheet_name: str | None = None) -> SourceTable:
    """Read one logical table from `path`.

    For workbooks `sheet_name=None` reads the first sheet.

    Raises:
        UnsupportedSourceError: unknown extension, unreadable file, or no header row
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedSourceError(f"unsupported file type: {path.name}")
    try:
        if suffix == ".csv":
            df = pd.read_csv(
                path,
                header=None,
                dtype=object,
                keep_default_na=False,
                skip_blank_lines=False,
                encoding="utf-8-sig",
            )
            return _frame_to_table(df, None)
        df = pd.read_excel(
            path,
            sheet_name=0 if sheet_name is None else sheet_name,
            header=None,
            engine="openpyxl",
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError as e:
        raise UnsupportedSourceError(f"{path.name} is empty") from e
    except (OSError, ValueError, zipfile.BadZipFile, InvalidFileException) as e:
        raise UnsupportedSourceError(f"cannot read {path.name}: {e}") from e
    return _frame_to_table(df, sheet_name)
