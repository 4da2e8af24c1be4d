"""
Physics Validator
Checks model outputs for finiteness, physical bounds, and derived-field consistency.
"""

from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from pemfc_lab.config.stack_presets import FuelCellConfig, ECOSENSE_1KW, VALIDATION_BOUNDS
from pemfc_lab.readings.reading import Reading


@dataclass
class ValidationResult:
    """Results from physics validation."""
    is_valid: bool
    violations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    numerical_errors: List[str] = field(default_factory=list)
    bounds_errors: List[str] = field(default_factory=list)
    consistency_errors: List[str] = field(default_factory=list)

    def add_violation(self, category: str, message: str):
        """Add a violation to the appropriate list."""
        self.violations.append(f"[{category}] {message}")
        self.is_valid = False

        if category == "numerical":
            self.numerical_errors.append(message)
        elif category == "bounds":
            self.bounds_errors.append(message)
        elif category == "consistency":
            self.consistency_errors.append(message)

    def add_warning(self, message: str):
        """Add a warning (doesn't invalidate)."""
        self.warnings.append(message)

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        return {
            "is_valid": self.is_valid,
            "total_violations": len(self.violations),
            "numerical_errors": len(self.numerical_errors),
            "bounds_errors": len(self.bounds_errors),
            "consistency_errors": len(self.consistency_errors),
            "warnings": len(self.warnings)
        }


class PhysicsValidator:
    """
    Validates readings and sweeps produced by FuelCellModel.

    Checks:
    1. Numerical sanity (no NaN/inf)
    2. Bounds (efficiency clamp, low-voltage floor)
    3. Consistency (power == voltage * current)
    4. Operating limits (stack current below I_L)
    """

    def __init__(self, config: FuelCellConfig = ECOSENSE_1KW, verbose: bool = False):
        """
        Initialize validator.

        Args:
            config: Stack whose limits apply
            verbose: Print validation messages
        """
        self.config = config
        self.verbose = verbose
        self.efficiency_bounds = VALIDATION_BOUNDS["efficiency"]
        self.power_tolerance = VALIDATION_BOUNDS["power_tolerance"]

    def validate_reading(self, reading: Reading) -> ValidationResult:
        """
        Validate a single reading.

        Args:
            reading: Reading to check

        Returns:
            ValidationResult object
        """
        result = ValidationResult(is_valid=True)
        self._check_point(
            result,
            label=f"{reading.flow_rate:.1f} L/min",
            voltage=reading.voltage,
            current=reading.current,
            power=reading.power,
            efficiency=reading.efficiency,
        )
        self._report(result)
        return result

    def validate_sweep(self, df: pd.DataFrame) -> ValidationResult:
        """
        Validate every row of a FuelCellModel.sweep() frame.

        Args:
            df: Sweep DataFrame

        Returns:
            ValidationResult object
        """
        result = ValidationResult(is_valid=True)
        for row in df.itertuples(index=False):
            self._check_point(
                result,
                label=f"{row.flow_rate_L_min:.2f} L/min",
                voltage=row.voltage_V,
                current=row.current_A,
                power=row.power_W,
                efficiency=row.efficiency_pct,
                stack_current=row.stack_current_A,
            )

        if len(df) > 1 and not np.all(np.diff(df["current_A"].to_numpy()) >= 0):
            result.add_violation("consistency", "Current is not monotonic in flow rate")

        self._report(result)
        return result

    def _check_point(
        self,
        result: ValidationResult,
        label: str,
        voltage: float,
        current: float,
        power: float,
        efficiency: float,
        stack_current: Optional[float] = None
    ):
        c = self.config
        values = {"voltage": voltage, "current": current, "power": power, "efficiency": efficiency}

        non_finite = [name for name, value in values.items() if not np.isfinite(value)]
        if non_finite:
            result.add_violation("numerical", f"{label}: non-finite {', '.join(non_finite)}")
            return

        eff_min, eff_max = self.efficiency_bounds
        if not eff_min <= efficiency <= eff_max:
            result.add_violation("bounds", f"{label}: efficiency {efficiency:.2f}% outside [{eff_min}, {eff_max}]")

        if voltage < c.low_voltage_shutdown:
            result.add_violation("bounds", f"{label}: voltage {voltage:.2f} V below {c.low_voltage_shutdown} V shutdown")

        # Rounding of V and I to 2 decimals bounds the error on their product
        slack = self.power_tolerance + 0.005 * (abs(voltage) + abs(current))
        if abs(power - voltage * current) > slack:
            result.add_violation(
                "consistency",
                f"{label}: power {power:.2f} W != voltage x current {voltage * current:.2f} W"
            )

        if stack_current is not None and stack_current >= c.limiting_current:
            result.add_violation("bounds", f"{label}: stack current {stack_current:.2f} A at limiting current")

        if current > c.over_current_shutdown:
            result.add_warning(f"{label}: current {current:.2f} A above over-current shutdown")

    def _report(self, result: ValidationResult):
        if self.verbose:
            summary = result.get_summary()
            if result.is_valid:
                print(f"✓ Validation passed ({summary['warnings']} warnings)")
            else:
                print(f"✗ Validation failed ({summary['total_violations']} violations)")
