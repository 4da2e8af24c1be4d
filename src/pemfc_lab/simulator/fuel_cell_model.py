"""
PEM Fuel Cell Stack Model
Steady-state stack voltage, current, power and efficiency from hydrogen flow
rate and stack temperature.

Implements the five-stage loss calculation:
1. Current from flow (linear rating or feed/transport limited)
2. Nernst potential
3. Activation overpotential (empirical Tafel polynomial)
4. Ohmic overpotential (Nafion membrane resistance)
5. Concentration overpotential
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple, Any

import numpy as np
import pandas as pd

from pemfc_lab.config.stack_presets import (
    T_STD,
    R_L_ATM,
    FuelCellConfig,
    ECOSENSE_1KW,
    VALIDATION_BOUNDS,
    kelvin_to_celsius,
)
from pemfc_lab.exceptions import DomainError
from pemfc_lab.readings.reading import Reading


@dataclass
class SafetyStatus:
    """Shutdown-limit check for one operating point."""
    voltage_safe: bool
    current_safe: bool
    temperature_safe: bool

    @property
    def all_safe(self) -> bool:
        return self.voltage_safe and self.current_safe and self.temperature_safe


class FuelCellModel:
    """
    Closed-form PEM stack model.

    The model holds only its configuration and is safe to share between
    callers. Every evaluation is independent.
    """

    def __init__(self, config: FuelCellConfig = ECOSENSE_1KW):
        """
        Initialize the model.

        Args:
            config: Physical constants of the stack
        """
        self.config = config

    def __repr__(self) -> str:
        return f"FuelCellModel({self.config.name!r})"

    def stack_current(self, flow_rate: float, temperature_k: float) -> Tuple[float, float]:
        """
        Stage 1: current drawn from the hydrogen flow.

        Args:
            flow_rate: Hydrogen flow rate [L/min]
            temperature_k: Stack temperature [K]

        Returns:
            I_ext: External (load) current [A]
            I: Total stack current including internal loss [A]
        """
        c = self.config
        if flow_rate < 0:
            raise DomainError(f"Flow rate must be non-negative, got {flow_rate} L/min", stage="current")

        if c.feed_limited:
            # Faraday's law: 2 electrons per H2, feed shared by every cell in series
            molar_volume = R_L_ATM * temperature_k / c.pressure_atm  # L/mol
            n_H2 = (flow_rate / molar_volume) / 60.0  # mol/s
            I_feed = 2.0 * c.F * n_H2 * c.hydrogen_utilization / c.n_cells
            I_transport = c.limiting_current_density * c.active_area * c.transport_margin
            I_ext = max(0.0, min(I_feed, I_transport))
        else:
            I_ext = (flow_rate / c.max_flow_rate) * c.rated_current

        return I_ext, I_ext + c.current_loss

    def nernst_potential(self, temperature_k: float) -> float:
        """
        Stage 2: open-circuit (Nernst) potential of one cell.

        E = E0 + (RT/2F) ln(p_H2 sqrt(p_O2) / p_H2O) - (ΔS/2F)(T - 298.15)

        Args:
            temperature_k: Stack temperature [K]

        Returns:
            E: Cell potential [V]
        """
        c = self.config
        RT_over_2F = (c.R * temperature_k) / (2.0 * c.F)
        pressure_term = RT_over_2F * np.log((c.p_H2 * np.sqrt(c.p_O2)) / c.p_H2O)
        entropy_term = (c.delta_S / (2.0 * c.F)) * (temperature_k - T_STD)
        return float(c.E0 + pressure_term - entropy_term)

    def activation_overpotential(self, current: float, temperature_k: float) -> float:
        """
        Stage 3: activation overpotential magnitude.

        ΔV_act = ξ1 + ξ2 T + ξ3 T ln(C_O2) + ξ4 T ln(I)

        Args:
            current: Total stack current [A]
            temperature_k: Stack temperature [K]

        Returns:
            |ΔV_act| [V], 0 when no current flows
        """
        if current <= 0:
            return 0.0

        c = self.config
        T = temperature_k
        C_O2 = c.p_O2 / (5.08e6 * np.exp(-498.0 / T))
        delta_v = c.xi1 + c.xi2 * T + c.xi3 * T * np.log(C_O2) + c.xi4 * T * np.log(current)
        return float(abs(delta_v))

    def ohmic_overpotential(self, current: float, temperature_k: float) -> Tuple[float, float]:
        """
        Stage 4: ohmic overpotential.

        Nafion membrane resistance (Mann et al.) unless a lumped ASR is configured.
        The denominator turns negative for large I/A or dry membranes; the
        resulting negative resistance is returned as is.

        Args:
            current: Total stack current [A]
            temperature_k: Stack temperature [K]

        Returns:
            ΔV_ohm: Ohmic overpotential [V]
            R_ion: Membrane resistance [Ω]
        """
        c = self.config
        if c.area_specific_resistance is not None:
            R_cell = c.area_specific_resistance / c.active_area
            return current * R_cell, R_cell

        T = temperature_k
        j = current / c.active_area  # A/cm²
        numerator = 181.6 * (1.0 + 0.03 * j + 0.062 * (T / 303.0) ** 2 * j ** 2.5)
        denominator = (c.membrane_water_content - 0.634 - 3.0 * j) * np.exp(4.18 * (T - 303.0) / 303.0)
        if denominator == 0:
            raise DomainError(
                f"Membrane resistance undefined at {j:.3f} A/cm² "
                f"(water content {c.membrane_water_content})",
                stage="ohmic"
            )

        R_ion = (c.membrane_thickness / c.active_area) * (numerator / denominator)
        return float(R_ion * current), float(R_ion)

    def concentration_overpotential(self, current: float, temperature_k: float) -> float:
        """
        Stage 5: concentration (mass transport) overpotential.

        ΔV_con = (1 + 1/α) RT/(nF) ln(I_L / (I_L - I)), active above the
        configured current threshold.

        Args:
            current: Total stack current [A]
            temperature_k: Stack temperature [K]

        Returns:
            ΔV_con [V]

        Raises:
            DomainError: current at or beyond the limiting current
        """
        c = self.config
        if current <= c.concentration_threshold:
            return 0.0

        I_L = c.limiting_current
        if current >= I_L:
            raise DomainError(
                f"Stack current {current:.2f} A reaches the limiting current {I_L:.1f} A",
                stage="concentration"
            )

        prefactor = (1.0 + 1.0 / c.alpha) * c.R * temperature_k / (c.n_electrons * c.F)
        return float(prefactor * np.log(I_L / (I_L - current)))

    def hydrogen_input_power(self, flow_rate: float) -> float:
        """Chemical power of the hydrogen feed on an LHV basis [W]."""
        c = self.config
        return (flow_rate / 60000.0) * c.rho_h2 * c.lhv_h2

    def aux_power(self, temperature_k: float) -> float:
        """Balance-of-plant load [W], linear in temperature over the configured range."""
        c = self.config
        if c.aux_power_min == 0 and c.aux_power_max == 0:
            return 0.0
        T_lo, T_hi = c.aux_temperature_range
        fraction = float(np.clip((temperature_k - T_lo) / (T_hi - T_lo), 0.0, 1.0))
        return c.aux_power_min + (c.aux_power_max - c.aux_power_min) * fraction

    def breakdown(self, flow_rate: float, temperature_k: float) -> Dict[str, Any]:
        """
        Full-precision evaluation with the loss decomposition.

        Args:
            flow_rate: Hydrogen flow rate [L/min]
            temperature_k: Stack temperature [K]

        Returns:
            Dictionary of intermediate and final quantities, plus a
            'warnings' list for non-fatal model fragility
        """
        c = self.config
        if temperature_k <= 0:
            raise DomainError(f"Temperature must be positive, got {temperature_k} K", stage="nernst")

        warnings: List[str] = []

        I_ext, I = self.stack_current(flow_rate, temperature_k)
        E_nernst = self.nernst_potential(temperature_k)
        eta_act = self.activation_overpotential(I, temperature_k)
        eta_ohm, R_ion = self.ohmic_overpotential(I, temperature_k)
        eta_con = self.concentration_overpotential(I, temperature_k)

        if R_ion < 0:
            warnings.append(f"Negative membrane resistance ({R_ion:.4g} Ω) at I = {I:.2f} A")

        V_cell_raw = E_nernst - eta_act - eta_ohm - eta_con
        V_cell = max(V_cell_raw, c.cell_voltage_floor)
        V_stack = V_cell * c.n_cells
        voltage = max(V_stack, c.low_voltage_shutdown)
        if V_cell_raw < c.cell_voltage_floor:
            warnings.append(f"Cell voltage {V_cell_raw:.3f} V clipped to {c.cell_voltage_floor} V floor")

        power = voltage * I_ext

        P_H2 = self.hydrogen_input_power(flow_rate)
        P_aux = self.aux_power(temperature_k)
        if power > 0 and P_H2 > 0:
            efficiency = ((power - P_aux) / P_H2) * 100.0
        else:
            efficiency = 0.0
        eff_min, eff_max = VALIDATION_BOUNDS["efficiency"]
        efficiency = max(eff_min, min(efficiency, eff_max))

        result = {
            "flow_rate": flow_rate,
            "temperature_K": temperature_k,
            "current_ext": I_ext,
            "current_stack": I,
            "E_nernst": E_nernst,
            "eta_act": eta_act,
            "eta_ohm": eta_ohm,
            "eta_con": eta_con,
            "R_ion": R_ion,
            "V_cell": V_cell,
            "V_stack": V_stack,
            "voltage": voltage,
            "power": power,
            "P_H2": P_H2,
            "P_aux": P_aux,
            "efficiency": efficiency,
        }

        for key, value in result.items():
            if not np.isfinite(value):
                raise DomainError(f"Non-finite {key} at {flow_rate} L/min, {temperature_k} K", stage=key)

        result["warnings"] = warnings
        return result

    def evaluate(self, flow_rate: float, temperature_k: float) -> Reading:
        """
        Evaluate one operating point.

        Args:
            flow_rate: Hydrogen flow rate [L/min]
            temperature_k: Stack temperature [K]

        Returns:
            Reading rounded to 2 decimals (serial number unassigned)

        Raises:
            DomainError: a guarded logarithm or division left its domain
        """
        point = self.breakdown(flow_rate, temperature_k)
        return Reading(
            flow_rate=round(float(flow_rate), 2),
            temperature_k=float(temperature_k),
            voltage=round(point["voltage"], 2),
            current=round(point["current_ext"], 2),
            efficiency=round(point["efficiency"], 2),
        )

    def sweep(
        self,
        target_flow: float,
        temperature_k: float,
        n_points: int = 21
    ) -> pd.DataFrame:
        """
        Evaluate a parametric sweep from zero flow to target_flow.

        Args:
            target_flow: Final flow rate of the sweep [L/min]
            temperature_k: Stack temperature [K]
            n_points: Number of evenly spaced points, including both ends

        Returns:
            DataFrame with one row per flow rate
        """
        if target_flow <= 0:
            raise ValueError(f"target_flow must be positive, got {target_flow}")
        if n_points < 2:
            raise ValueError(f"n_points must be at least 2, got {n_points}")

        rows = []
        for flow in np.linspace(0.0, target_flow, n_points):
            point = self.breakdown(float(flow), temperature_k)
            rows.append({
                "flow_rate_L_min": round(float(flow), 2),
                "current_A": round(point["current_ext"], 2),
                "voltage_V": round(point["voltage"], 2),
                "power_W": round(point["power"], 2),
                "efficiency_pct": round(point["efficiency"], 2),
                "stack_current_A": point["current_stack"],
                "E_nernst_V": point["E_nernst"],
                "eta_act_V": point["eta_act"],
                "eta_ohm_V": point["eta_ohm"],
                "eta_con_V": point["eta_con"],
                "R_ion_ohm": point["R_ion"],
                "temperature_C": kelvin_to_celsius(temperature_k),
            })

        return pd.DataFrame(rows)

    def check_safety_limits(
        self,
        voltage: float,
        current: float,
        temperature_c: float
    ) -> SafetyStatus:
        """
        Compare an operating point against the stack's shutdown limits.

        Args:
            voltage: Stack voltage [V]
            current: External current [A]
            temperature_c: Stack temperature [°C]
        """
        c = self.config
        return SafetyStatus(
            voltage_safe=voltage >= c.low_voltage_shutdown,
            current_safe=current <= c.over_current_shutdown,
            temperature_safe=temperature_c <= c.over_temp_shutdown_c,
        )
