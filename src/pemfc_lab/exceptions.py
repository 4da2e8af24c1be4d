"""
Error taxonomy for the fuel cell model and reading log.

All errors are local and recoverable: they are raised from the call that
failed and leave any ReadingLog unchanged.
"""


class FuelCellError(Exception):
    """Base class for every error raised by pemfc_lab."""


class DomainError(FuelCellError, ValueError):
    """A guarded log/division argument left its valid domain."""

    def __init__(self, message: str, stage: str = ""):
        super().__init__(message)
        self.stage = stage


class ReadingLogError(FuelCellError):
    """A ReadingLog mutation was rejected."""


class CapacityExceeded(ReadingLogError):
    def __init__(self, max_readings: int):
        super().__init__(
            f"You can only record up to {max_readings} readings. "
            "Delete some readings to add new ones."
        )
        self.max_readings = max_readings


class DuplicateFlowRate(ReadingLogError):
    def __init__(self, flow_rate: float, existing: float, tolerance: float):
        super().__init__(
            f"A reading at {existing:.1f} L/min already exists "
            f"(±{tolerance} L/min of {flow_rate:.2f} L/min)."
        )
        self.flow_rate = flow_rate
        self.existing = existing
        self.tolerance = tolerance


class ReadingNotFound(ReadingLogError, KeyError):
    def __init__(self, reading_id):
        super().__init__(f"No reading with id {reading_id}")
        self.reading_id = reading_id

    def __str__(self) -> str:
        return self.args[0]


class ExportError(FuelCellError):
    """Writing an export failed; the underlying OSError is chained."""
