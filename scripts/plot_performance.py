"""
Plot PEM stack performance characteristics.
Current, voltage and power vs hydrogen flow rate, plus the per-cell loss breakdown.
"""

import os
import sys
from typing import Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from pemfc_lab import FuelCellModel, celsius_to_kelvin
from pemfc_lab.analysis import curve_statistics
from pemfc_lab.config import OPERATING_BOUNDS, get_preset
from pemfc_lab.physics_validator import PhysicsValidator


def plot_performance(
    preset: str = "ecosense",
    target_flow: Optional[float] = None,
    temperature_c: float = 30.0,
    output_path: str = "results/figures/performance_curves.png"
):
    config = get_preset(preset)
    model = FuelCellModel(config)
    T = celsius_to_kelvin(temperature_c)
    if target_flow is None:
        target_flow = OPERATING_BOUNDS[preset.lower()]["flow_rate"][1]

    df = model.sweep(target_flow, T, n_points=21)

    validation = PhysicsValidator(config, verbose=True).validate_sweep(df)
    for v in validation.violations:
        print(f"  - {v}")

    fig = plt.figure(figsize=(12, 9))
    gs = fig.add_gridspec(2, 3, height_ratios=[1, 1])

    panels = [
        ("current_A", "Current (A)", "tab:blue"),
        ("voltage_V", "Voltage (V)", "tab:green"),
        ("power_W", "Power (W)", "tab:orange"),
    ]
    for k, (column, label, color) in enumerate(panels):
        ax = fig.add_subplot(gs[0, k])
        ax.plot(df["flow_rate_L_min"], df[column], color=color, linewidth=3)
        ax.set_xlabel("H$_2$ Flow Rate (L/min)")
        ax.set_ylabel(label)
        ax.grid(True, alpha=0.3)

        stats = curve_statistics(df, column)
        ax.set_title(f"{label.split(' ')[0]}: {stats.min_value:.1f}–{stats.max_value:.1f}, "
                     f"slope {stats.final_slope:.2f}", fontsize=10)

    # Loss decomposition per cell
    ax_loss = fig.add_subplot(gs[1, :])
    flow = df["flow_rate_L_min"]
    ax_loss.plot(flow, df["E_nernst_V"], "g--", linewidth=2, label="$E_{Nernst}$")
    ax_loss.plot(flow, df["eta_act_V"], color="orange", linewidth=2, label="|ΔV$_{act}$|")
    ax_loss.plot(flow, df["eta_ohm_V"], color="red", linewidth=2, label="ΔV$_{ohm}$")
    ax_loss.plot(flow, df["eta_con_V"], color="purple", linewidth=2, label="ΔV$_{con}$")
    ax_loss.set_xlabel("H$_2$ Flow Rate (L/min)")
    ax_loss.set_ylabel("Per-cell potential (V)")
    ax_loss.legend(loc="best")
    ax_loss.grid(True, alpha=0.3)

    fig.suptitle(f"{config.name} | {config.n_cells} cells | {temperature_c:.0f} °C", fontweight="bold")
    fig.tight_layout()

    os.makedirs(os.path.dirname(output_path), exist_ok=True)
    fig.savefig(output_path, dpi=300, bbox_inches="tight")
    plt.close(fig)
    print(f"✓ Saved figure to: {output_path}")

    return df


def main():
    preset = sys.argv[1] if len(sys.argv) > 1 else "ecosense"
    plot_performance(preset=preset, output_path=f"results/figures/performance_{preset}.png")


if __name__ == "__main__":
    main()
