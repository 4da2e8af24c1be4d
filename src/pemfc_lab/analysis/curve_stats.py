"""
Summary statistics of a performance curve (value vs hydrogen flow rate).
"""

from dataclasses import dataclass, asdict
from typing import Dict

import numpy as np
import pandas as pd


@dataclass
class CurveStatistics:
    """Chart summary for one output column of a sweep."""
    column: str
    min_value: float
    max_value: float
    mean_value: float
    std_value: float  # population standard deviation
    initial_slope: float  # d(value)/d(flow) over the first interval
    final_slope: float  # d(value)/d(flow) over the last interval
    flow_range: tuple

    def to_dict(self) -> Dict:
        return asdict(self)


def _slope(dy: float, dx: float) -> float:
    return dy / dx if dx != 0 else 0.0


def curve_statistics(
    df: pd.DataFrame,
    column: str,
    flow_column: str = "flow_rate_L_min"
) -> CurveStatistics:
    """
    Summarise one column of a sweep or reading table.

    Args:
        df: DataFrame ordered by flow rate
        column: Output column, e.g. 'power_W'
        flow_column: Flow rate column

    Returns:
        CurveStatistics; every field is 0 for an empty frame
    """
    y = df[column].to_numpy(dtype=float)
    x = df[flow_column].to_numpy(dtype=float)

    if len(y) == 0:
        return CurveStatistics(column, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, (0.0, 0.0))

    if len(y) >= 2:
        initial_slope = _slope(y[1] - y[0], x[1] - x[0])
        final_slope = _slope(y[-1] - y[-2], x[-1] - x[-2])
    else:
        initial_slope = final_slope = 0.0

    return CurveStatistics(
        column=column,
        min_value=float(np.min(y)),
        max_value=float(np.max(y)),
        mean_value=float(np.mean(y)),
        std_value=float(np.std(y)),
        initial_slope=float(initial_slope),
        final_slope=float(final_slope),
        flow_range=(float(np.min(x)), float(np.max(x))),
    )
