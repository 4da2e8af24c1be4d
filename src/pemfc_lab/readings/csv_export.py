"""
CSV export of recorded readings in the lab manual table format.
"""

import io
from pathlib import Path
from typing import Union

import pandas as pd

from pemfc_lab.exceptions import ExportError
from pemfc_lab.readings.reading_log import ReadingLog


DEFAULT_FILENAME = "fuel_cell_experiment_data.csv"


def write_csv(log: ReadingLog, path: Union[str, Path], verbose: bool = True) -> Path:
    """
    Write the log as UTF-8 CSV.

    Args:
        log: Readings to export
        path: Target file, or a directory to receive DEFAULT_FILENAME
        verbose: Print the destination

    Returns:
        Path that was written

    Raises:
        ExportError: the file could not be written
    """
    path = Path(path)
    if path.is_dir():
        path = path / DEFAULT_FILENAME

    try:
        path.write_text(log.export() + "\n", encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to export data to {path}: {e}") from e

    if verbose:
        print(f"✓ Exported {len(log)} readings to: {path}")
    return path


def read_csv(source: Union[str, Path, io.StringIO]) -> pd.DataFrame:
    """Parse an exported file (or text buffer) back into a DataFrame."""
    return pd.read_csv(source, encoding="utf-8")
