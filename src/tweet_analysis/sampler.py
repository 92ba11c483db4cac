"""
Bounded, order-preserving sampling of the tweet CSV for LLM consumption
Strategy: rows [start_index, start_index + max_rows) in file order
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

import pandas as pd

from .exceptions import SourceEmpty, SourceNotFound, SourceUnreadable

logger = logging.getLogger(__name__)

Row = Dict[str, str]

# Positional fallbacks when the header lacks the expected column names
ID_COLUMN, ID_POSITION = "id", 0
TEXT_COLUMN, TEXT_POSITION = "tweet", 6


@dataclass
class SampleWindow:
    """Ordered slice of the source rows used for one pipeline run"""
    start_index: int
    total_rows: int
    rows: List[Row] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.rows)


def row_id(row: Row) -> str:
    """Tweet identifier: the `id` column, else the first column"""
    return _lookup(row, ID_COLUMN, ID_POSITION)


def row_text(row: Row) -> str:
    """Tweet text: the `tweet` column, else the seventh column"""
    return _lookup(row, TEXT_COLUMN, TEXT_POSITION)


def _lookup(row: Row, column: str, position: int) -> str:
    value = row.get(column)
    if value:
        return value
    values = list(row.values())
    if position < len(values):
        return values[position]
    return ""


class CSVSampler:
    """Samples a bounded window of rows from a CSV file"""

    def load(self, csv_path: str) -> List[Row]:
        """
        Read every row of the CSV as a column -> string mapping

        Raises:
            SourceNotFound: the file does not exist
            SourceEmpty: the file has no data rows
            SourceUnreadable: the file is not valid UTF-8 CSV (e.g. ragged rows)
        """
        path = Path(csv_path)
        if not path.exists():
            raise SourceNotFound(f"CSV file not found: {path.name}")

        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            raise SourceEmpty(f"CSV file is empty: {path.name}")
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            logger.error(f"Failed to parse {path.name}: {e}")
            raise SourceUnreadable(f"CSV file could not be parsed: {path.name}", details=str(e))

        if df.empty:
            raise SourceEmpty(f"CSV file is empty: {path.name}")

        rows = df.to_dict(orient="records")
        logger.info(f"Loaded {len(rows)} rows from {path.name} ({len(df.columns)} columns)")
        return rows

    def sample(self, csv_path: str, start_index: int = 0, max_rows: int = 1000) -> Tuple[List[Row], SampleWindow]:
        """
        Load the CSV and cut the sample window

        Args:
            csv_path: Path to the tweet CSV
            start_index: First row of the window (0-based)
            max_rows: Maximum rows in the window

        Returns:
            Tuple of (all_rows, window). A start_index past the end yields
            an empty window.
        """
        if start_index < 0:
            raise ValueError(f"start_index must be >= 0, got {start_index}")
        if max_rows < 0:
            raise ValueError(f"max_rows must be >= 0, got {max_rows}")

        rows = self.load(csv_path)

        end_index = min(start_index + max_rows, len(rows))
        window = SampleWindow(
            start_index=start_index,
            total_rows=len(rows),
            rows=rows[start_index:end_index],
        )

        logger.info(f"Sampled rows [{start_index}, {start_index + window.count}) of {len(rows)}")
        return rows, window
