"""
pemfc_lab
Steady-state PEM fuel cell stack simulator for training-lab experiments.
"""

from .config import FuelCellConfig, ECOSENSE_1KW, H500XP, celsius_to_kelvin, kelvin_to_celsius
from .exceptions import (
    FuelCellError,
    DomainError,
    ReadingLogError,
    CapacityExceeded,
    DuplicateFlowRate,
    ReadingNotFound,
    ExportError,
)
from .readings import Reading, ReadingLog, CSV_HEADER, write_csv, read_csv
from .simulator import FuelCellModel, SafetyStatus

__version__ = "0.1.0"

__all__ = [
    'FuelCellConfig',
    'ECOSENSE_1KW',
    'H500XP',
    'celsius_to_kelvin',
    'kelvin_to_celsius',
    'FuelCellError',
    'DomainError',
    'ReadingLogError',
    'CapacityExceeded',
    'DuplicateFlowRate',
    'ReadingNotFound',
    'ExportError',
    'Reading',
    'ReadingLog',
    'CSV_HEADER',
    'write_csv',
    'read_csv',
    'FuelCellModel',
    'SafetyStatus',
]
