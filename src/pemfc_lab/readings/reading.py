"""
Fuel Cell Reading
One recorded operating point, laid out like the lab manual observation table.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, Any

from pemfc_lab.config.stack_presets import kelvin_to_celsius


CSV_HEADER = (
    "S.No.,Hydrogen Flow Rate (L/min),Current (A),Voltage (V),"
    "Power (W),Efficiency (%),Temperature (°C)"
)


@dataclass(frozen=True)
class Reading:
    """
    Steady-state output of FuelCellModel.evaluate().

    serial_number is display-only and is reassigned by the ReadingLog on
    every mutation; id is the stable identity used to remove a reading.
    """
    flow_rate: float  # L/min
    temperature_k: float  # K
    voltage: float  # V, stack
    current: float  # A, external load current
    efficiency: float  # %
    serial_number: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4, compare=False)

    @property
    def power(self) -> float:
        """Power [W], always derived from voltage and current."""
        return round(self.voltage * self.current, 2)

    @property
    def temperature_c(self) -> float:
        return kelvin_to_celsius(self.temperature_k)

    def with_serial(self, serial_number: int) -> "Reading":
        return replace(self, serial_number=serial_number)

    def to_csv_row(self) -> str:
        return (
            f"{self.serial_number},{self.flow_rate:.1f},{self.current:.2f},"
            f"{self.voltage:.2f},{self.power:.2f},{self.efficiency:.2f},"
            f"{self.temperature_c:.1f}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "serial_number": self.serial_number,
            "flow_rate_L_min": self.flow_rate,
            "current_A": self.current,
            "voltage_V": self.voltage,
            "power_W": self.power,
            "efficiency_pct": self.efficiency,
            "temperature_C": round(self.temperature_c, 2),
            "id": str(self.id),
        }
