"""
Readings Package
Recorded operating points, the bounded reading log, and CSV export.
"""

from .reading import Reading, CSV_HEADER
from .reading_log import ReadingLog
from .csv_export import write_csv, read_csv

__all__ = ['Reading', 'CSV_HEADER', 'ReadingLog', 'write_csv', 'read_csv']
