"""
Configuration Package
Physical constants and stack presets.
"""

from .stack_presets import (
    F, R, T_STD,
    FuelCellConfig,
    ECOSENSE_1KW,
    H500XP,
    PRESETS,
    OPERATING_BOUNDS,
    READING_LOG,
    VALIDATION_BOUNDS,
    celsius_to_kelvin,
    kelvin_to_celsius,
    get_preset,
)

__all__ = [
    'F', 'R', 'T_STD',
    'FuelCellConfig',
    'ECOSENSE_1KW',
    'H500XP',
    'PRESETS',
    'OPERATING_BOUNDS',
    'READING_LOG',
    'VALIDATION_BOUNDS',
    'celsius_to_kelvin',
    'kelvin_to_celsius',
    'get_preset',
]
