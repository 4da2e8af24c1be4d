"""
Analysis Package
Summary statistics of performance curves.
"""

from .curve_stats import CurveStatistics, curve_statistics

__all__ = ['CurveStatistics', 'curve_statistics']
