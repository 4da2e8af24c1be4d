"""
Stack Presets
Physical constants and per-stack configuration for the PEM fuel cell model.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


F = 96485.0


R = 8.314


T_STD = 298.15


R_L_ATM = 0.082057


KELVIN_OFFSET = 273.15




@dataclass(frozen=True)
class FuelCellConfig:
    """
    Physical constants of one PEM stack.

    A preset represents one specific stack; build a modified copy with
    dataclasses.replace() rather than editing a preset.
    """
    name: str

    # Stack ratings
    n_cells: int = 48
    rated_current: float = 35.0  # A
    max_flow_rate: float = 13.0  # L/min at rated output
    current_loss: float = 0.3  # A, internal current that never reaches the load

    # Membrane (Nafion)
    active_area: float = 76.0  # cm² per cell
    membrane_thickness: float = 25e-4  # cm
    membrane_water_content: float = 7.0

    # Nernst
    E0: float = 1.229  # V
    R: float = R
    F: float = F
    delta_S: float = 163.3  # J/(mol·K)

    # Partial pressures [bar]
    p_H2: float = 0.5
    p_O2: float = 0.21
    p_H2O: float = 1.0

    # Empirical Tafel coefficients
    xi1: float = -1.00
    xi2: float = -0.0034
    xi3: float = -0.000078
    xi4: float = 0.000185

    # Concentration losses
    alpha: float = 0.5
    n_electrons: float = 4.0
    concentration_threshold: float = 30.0  # A

    # Shutdown limits
    low_voltage_shutdown: float = 24.0  # V
    over_current_shutdown: float = 42.0  # A, also the limiting current I_L
    over_temp_shutdown_c: float = 65.0  # °C
    cell_voltage_floor: float = 0.5  # V

    # Hydrogen
    lhv_h2: float = 120.0e6  # J/kg
    rho_h2: float = 0.0899  # kg/m³

    # Feed/transport current limiting (variant stacks only)
    limiting_current_density: Optional[float] = None  # A/cm²
    hydrogen_utilization: float = 0.8
    pressure_atm: float = 1.0
    transport_margin: float = 0.999

    # Balance-of-plant parasitic load, interpolated over temperature [K]
    aux_power_min: float = 0.0  # W
    aux_power_max: float = 0.0  # W
    aux_temperature_range: Tuple[float, float] = (296.0, 338.0)

    # Lumped ASR replaces the Nafion membrane resistance when set
    area_specific_resistance: Optional[float] = None  # Ω·cm²

    @property
    def limiting_current(self) -> float:
        return self.over_current_shutdown

    @property
    def feed_limited(self) -> bool:
        return self.limiting_current_density is not None


# Ecosense 1 kW training stack (lab manual, Experiment 2)
ECOSENSE_1KW = FuelCellConfig(name="Ecosense 1kW")


# H-500XP: 30-cell, 500 W stack with feed/transport current limiting
H500XP = FuelCellConfig(
    name="H-500XP",
    n_cells=30,
    rated_current=33.5,
    p_H2=1.5,
    concentration_threshold=25.0,
    low_voltage_shutdown=15.0,
    over_current_shutdown=47.0,
    # Keeps I_transport + I_loss below I_L = 47 A
    limiting_current_density=0.6,
    aux_power_min=36.5,
    aux_power_max=52.0,
)


PRESETS = {
    "ecosense": ECOSENSE_1KW,
    "h500xp": H500XP,
}




# Informational operator ranges; the model extrapolates outside them
OPERATING_BOUNDS = {
    "ecosense": {
        "flow_rate": (0.5, 15.0),  # L/min
        "temperature_C": (5.0, 65.0),
    },
    "h500xp": {
        "flow_rate": (0.5, 15.0),
        "temperature_C": (23.0, 65.0),
    },
}


READING_LOG = {
    "max_readings": 7,
    "flow_rate_tolerance": 0.1,  # L/min
}


VALIDATION_BOUNDS = {
    "efficiency": (0.0, 50.0),  # %
    "power_tolerance": 0.01,  # W, rounding slack for power == V * I
}




def celsius_to_kelvin(T_celsius: float) -> float:
    return T_celsius + KELVIN_OFFSET


def kelvin_to_celsius(T_kelvin: float) -> float:
    return T_kelvin - KELVIN_OFFSET


def get_preset(name: str) -> FuelCellConfig:
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown stack preset '{name}'. Available: {sorted(PRESETS)}") from None
