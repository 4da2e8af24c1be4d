"""
Reading Log
Bounded, flow-ordered collection of recorded readings for one lab session.
"""

import uuid
from typing import Iterator, List, Optional

import pandas as pd

from pemfc_lab.config.stack_presets import READING_LOG
from pemfc_lab.exceptions import CapacityExceeded, DuplicateFlowRate, ReadingNotFound
from pemfc_lab.readings.reading import CSV_HEADER, Reading


class ReadingLog:
    """
    Ordered set of at most max_readings Readings.

    Readings are kept sorted by ascending flow rate and serial-numbered
    1..N after every mutation. Two readings may not lie within tolerance
    L/min of each other.

    Owned by a single writer; concurrent mutation needs an external lock.
    """

    def __init__(
        self,
        max_readings: int = READING_LOG["max_readings"],
        tolerance: float = READING_LOG["flow_rate_tolerance"],
        verbose: bool = False
    ):
        """
        Initialize an empty log.

        Args:
            max_readings: Capacity of the log
            tolerance: Minimum flow-rate separation between readings [L/min]
            verbose: Print a line for every mutation
        """
        self.max_readings = max_readings
        self.tolerance = tolerance
        self.verbose = verbose
        self._readings: List[Reading] = []

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self) -> Iterator[Reading]:
        return iter(list(self._readings))

    def __getitem__(self, index: int) -> Reading:
        return self._readings[index]

    @property
    def readings(self) -> List[Reading]:
        return list(self._readings)

    @property
    def is_full(self) -> bool:
        return len(self._readings) >= self.max_readings

    def find_duplicate(self, flow_rate: float) -> Optional[Reading]:
        """Existing reading within tolerance of flow_rate, if any."""
        for reading in self._readings:
            # Flows are stored at 2 dp; rounding drops float noise at exactly one tolerance step
            if round(abs(reading.flow_rate - flow_rate), 6) < self.tolerance:
                return reading
        return None

    def add(self, reading: Reading) -> Reading:
        """
        Insert a reading.

        Args:
            reading: Output of FuelCellModel.evaluate()

        Returns:
            The stored reading with its serial number assigned

        Raises:
            CapacityExceeded: log already holds max_readings entries
            DuplicateFlowRate: an entry lies within tolerance of this flow rate
        """
        if self.is_full:
            raise CapacityExceeded(self.max_readings)

        duplicate = self.find_duplicate(reading.flow_rate)
        if duplicate is not None:
            raise DuplicateFlowRate(reading.flow_rate, duplicate.flow_rate, self.tolerance)

        self._readings.append(reading)
        self._renumber()

        stored = self._get(reading.id)
        if self.verbose:
            print(f"✓ Recorded reading #{stored.serial_number} at {stored.flow_rate:.1f} L/min "
                  f"({len(self)}/{self.max_readings})")
        return stored

    def record(self, model, flow_rate: float, temperature_k: float) -> Reading:
        """Evaluate model at one operating point and add the result."""
        return self.add(model.evaluate(flow_rate, temperature_k))

    def remove(self, reading_id: uuid.UUID) -> Reading:
        """
        Delete the reading with the given identity.

        Raises:
            ReadingNotFound: no reading has this id
        """
        removed = self._get(reading_id)
        self._readings = [r for r in self._readings if r.id != reading_id]
        self._renumber()

        if self.verbose:
            print(f"✓ Removed reading at {removed.flow_rate:.1f} L/min ({len(self)}/{self.max_readings})")
        return removed

    def clear(self):
        self._readings = []
        if self.verbose:
            print("✓ Cleared all readings")

    def to_rows(self) -> List[str]:
        """CSV rows (without header) in ascending flow-rate order."""
        return [reading.to_csv_row() for reading in self._readings]

    def export(self) -> str:
        """Complete CSV text: header line followed by one row per reading."""
        return "\n".join([CSV_HEADER] + self.to_rows())

    def to_dataframe(self) -> pd.DataFrame:
        columns = [
            "serial_number", "flow_rate_L_min", "current_A", "voltage_V",
            "power_W", "efficiency_pct", "temperature_C", "id"
        ]
        return pd.DataFrame([r.to_dict() for r in self._readings], columns=columns)

    def _get(self, reading_id: uuid.UUID) -> Reading:
        for reading in self._readings:
            if reading.id == reading_id:
                return reading
        raise ReadingNotFound(reading_id)

    def _renumber(self):
        ordered = sorted(self._readings, key=lambda r: r.flow_rate)
        self._readings = [r.with_serial(i + 1) for i, r in enumerate(ordered)]
