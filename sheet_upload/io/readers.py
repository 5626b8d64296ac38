from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from sheet_upload.core.errors import EmptySpreadsheet, ParseFailure, UploadError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

@dataclass
class SheetParseResult:
    rows: List[Row] = field(default_factory=list)
    error: Optional[UploadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if value is pd.NaT:
        return True
    return isinstance(value, str) and value == ""

def _cell(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value

EMPTY_HEADER = "__EMPTY"

def header_labels(values) -> List[str]:
    """Label header cells: blanks become ``__EMPTY``, repeats get ``_1``, ``_2``..."""
    counts: Dict[str, int] = {}
    labels: List[str] = []
    for value in values:
        base = EMPTY_HEADER if _is_blank(value) else str(_cell(value))
        n = counts.get(base, 0)
        label = f"{base}_{n}" if n else base
        while label in labels:
            n += 1
            label = f"{base}_{n}"
        counts[base] = n + 1
        labels.append(label)
    return labels

class SheetReader:
    def __init__(self, include_blank_cells: bool = False):
        self.include_blank_cells = include_blank_cells

    def to_rows(self, df: pd.DataFrame) -> List[Row]:
        """Turn a sheet frame into row records keyed by its header labels."""
        df = df.dropna(how="all")
        headers = [str(c) for c in df.columns]
        rows: List[Row] = []
        for values in df.itertuples(index=False, name=None):
            row: Row = {}
            for header, value in zip(headers, values):
                if _is_blank(value):
                    if self.include_blank_cells:
                        row[header] = None
                    continue
                row[header] = _cell(value)
            if row:
                rows.append(row)
        return rows

    @staticmethod
    def with_header(grid: pd.DataFrame) -> pd.DataFrame:
        """Promote the first non-blank row of a raw sheet grid to column labels."""
        grid = grid.dropna(how="all")
        if grid.empty:
            return pd.DataFrame()
        df = grid.iloc[1:].copy()
        df.columns = header_labels(grid.iloc[0].tolist())
        return df

    def parse_first_sheet(self, path: str | Path) -> SheetParseResult:
        try:
            grid = pd.read_excel(path, sheet_name=0, header=None, dtype=object)
            rows = self.to_rows(self.with_header(grid))
        except Exception:
            logger.exception(f"Failed to parse spreadsheet {path}")
            return SheetParseResult(error=ParseFailure())

        if not rows:
            return SheetParseResult(error=EmptySpreadsheet())
        return SheetParseResult(rows=rows)
