"""
Simulator Package
Steady-state PEM fuel cell stack model.
"""

from .fuel_cell_model import FuelCellModel, SafetyStatus

__all__ = ['FuelCellModel', 'SafetyStatus']
