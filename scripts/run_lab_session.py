"""
Scripted lab session: record readings at several flow rates and export the table.
"""

import sys

from pemfc_lab import (
    FuelCellModel,
    FuelCellError,
    ReadingLog,
    ECOSENSE_1KW,
    celsius_to_kelvin,
    write_csv,
)


def run_session(
    flow_rates=(1.0, 3.0, 5.0, 5.05, 7.0, 9.0, 11.0, 13.0, 14.5),
    temperature_c: float = 30.0,
    output_path: str = "."
):
    print("\n" + "="*70)
    print(f"LAB SESSION: {ECOSENSE_1KW.name} at {temperature_c:.0f} °C")
    print("="*70)

    model = FuelCellModel(ECOSENSE_1KW)
    log = ReadingLog(verbose=True)
    T = celsius_to_kelvin(temperature_c)

    for flow in flow_rates:
        try:
            log.record(model, flow, T)
        except FuelCellError as e:
            print(f"⚠ {flow:.2f} L/min rejected: {e}")

    print("\n" + "-"*70)
    print(log.export())
    print("-"*70)

    try:
        write_csv(log, output_path)
    except FuelCellError as e:
        print(f"✗ {e}")

    return log


if __name__ == "__main__":
    run_session(output_path=sys.argv[1] if len(sys.argv) > 1 else ".")
