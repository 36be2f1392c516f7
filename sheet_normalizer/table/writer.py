from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.canonical import CANONICAL_COLUMNS, N_CANONICAL
from ..models.errors import InvalidInputError, UnsupportedSourceError

"""Writer for canonical rows (.csv / .xlsx) with the canonical header row."""

__all__ = [
    "write_table",
]


def write_table(path: Path, rows: Sequence[Sequence[str]], append: bool = False) -> Path:
    """Write `rows` under the canonical header.

    With `append=True` rows are added after an existing file's rows and the
    header is written only when the file is new.

    Raises:
        InvalidInputError: a row does not have exactly 10 cells
        UnsupportedSourceError: unsupported output extension
    """
    for i, row in enumerate(rows):
        if len(row) != N_CANONICAL:
            raise InvalidInputError(f"row {i} has {len(row)} cells, expected {N_CANONICAL}")

    suffix = path.suffix.lower()
    if suffix not in (".csv", ".xlsx"):
        raise UnsupportedSourceError(f"unsupported output type: {path.name}")

    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([list(r) for r in rows], columns=list(CANONICAL_COLUMNS), dtype=object)
    exists = path.exists()

    if suffix == ".csv":
        if append and exists:
            df.to_csv(path, mode="a", header=False, index=False)
        else:
            df.to_csv(path, index=False)
        return path

    if append and exists:
        previous = pd.read_excel(path, dtype=object, keep_default_na=False, engine="openpyxl")
        df = pd.concat([previous, df], ignore_index=True)
    df.to_excel(path, index=False, engine="openpyxl")
    return path
