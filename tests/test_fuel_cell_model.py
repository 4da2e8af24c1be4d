"""Unit tests for the five-stage stack model."""

from __future__ import annotations

import math
from dataclasses import replace

import numpy as np
import pytest

from pemfc_lab import DomainError, ECOSENSE_1KW, FuelCellModel, H500XP


FLOWS = np.round(np.arange(0.5, 15.01, 0.5), 2)
TEMPERATURES_K = [278.15, 298.15, 318.15, 338.15]


def test_reference_operating_point(model, T_30C) -> None:
    reading = model.evaluate(8.5, T_30C)

    assert reading.current == pytest.approx(22.88, abs=0.01)
    assert 24.0 <= reading.voltage <= 29.0
    assert reading.power == pytest.approx(reading.voltage * reading.current, abs=0.01)
    assert reading.efficiency == pytest.approx(35.94, abs=0.05)
    assert reading.flow_rate == 8.5
    assert reading.temperature_c == pytest.approx(30.0)
    assert reading.serial_number == 0


@pytest.mark.parametrize("temperature_k", TEMPERATURES_K)
def test_outputs_are_finite_and_bounded_over_domain(model, temperature_k) -> None:
    for flow in FLOWS:
        reading = model.evaluate(float(flow), temperature_k)

        for value in (reading.voltage, reading.current, reading.power, reading.efficiency):
            assert math.isfinite(value)
        assert 0.0 <= reading.efficiency <= 50.0
        assert reading.voltage >= ECOSENSE_1KW.low_voltage_shutdown
        assert reading.power == pytest.approx(reading.voltage * reading.current, abs=0.01)


def test_current_increases_strictly_with_flow(model, T_30C) -> None:
    currents = [model.evaluate(float(flow), T_30C).current for flow in FLOWS]

    assert all(b > a for a, b in zip(currents, currents[1:]))


def test_stack_current_adds_internal_loss(model, T_30C) -> None:
    I_ext, I = model.stack_current(13.0, T_30C)

    assert I_ext == pytest.approx(35.0)
    assert I == pytest.approx(35.3)


def test_nernst_potential_at_standard_temperature(model) -> None:
    # Entropy term vanishes at 298.15 K; only the pressure term remains
    assert model.nernst_potential(298.15) == pytest.approx(1.2101, abs=1e-3)


def test_nernst_potential_falls_with_temperature(model) -> None:
    assert model.nernst_potential(338.15) < model.nernst_potential(298.15)


def test_activation_loss_is_zero_without_current(model, T_30C) -> None:
    assert model.activation_overpotential(0.0, T_30C) == 0.0
    assert model.activation_overpotential(-1.0, T_30C) == 0.0


def test_activation_loss_is_a_magnitude(model, T_30C) -> None:
    assert model.activation_overpotential(23.0, T_30C) > 0.0


def test_concentration_loss_inactive_below_threshold(model, T_30C) -> None:
    assert model.concentration_overpotential(29.9, T_30C) == 0.0
    assert model.concentration_overpotential(35.0, T_30C) > 0.0


def test_current_at_limiting_current_raises_domain_error(model, T_30C) -> None:
    # 15.6 L/min -> I_ext = 42.0 A, I = 42.3 A >= I_L = 42 A
    with pytest.raises(DomainError) as excinfo:
        model.evaluate(15.6, T_30C)

    assert excinfo.value.stage == "concentration"


def test_negative_flow_raises_domain_error(model, T_30C) -> None:
    with pytest.raises(DomainError):
        model.evaluate(-1.0, T_30C)


def test_non_positive_temperature_raises_domain_error(model) -> None:
    with pytest.raises(DomainError):
        model.evaluate(5.0, 0.0)


def test_zero_membrane_denominator_raises_domain_error(T_30C) -> None:
    # No current and water content equal to the 0.634 offset zero the denominator
    stack = FuelCellModel(replace(ECOSENSE_1KW, membrane_water_content=0.634, current_loss=0.0))

    with pytest.raises(DomainError) as excinfo:
        stack.evaluate(0.0, T_30C)

    assert excinfo.value.stage == "ohmic"


def test_non_finite_intermediate_raises_domain_error(model) -> None:
    # exp(-498/T) underflows at 1 mK, so C_O2 and the activation loss diverge
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        with pytest.raises(DomainError) as excinfo:
            model.evaluate(5.0, 1e-3)

    assert excinfo.value.stage == "eta_act"


def test_negative_membrane_resistance_is_reported_not_fatal(T_30C) -> None:
    dry_stack = FuelCellModel(replace(ECOSENSE_1KW, membrane_water_content=0.5))

    point = dry_stack.breakdown(8.5, T_30C)
    reading = dry_stack.evaluate(8.5, T_30C)

    assert point["R_ion"] < 0
    assert any("Negative membrane resistance" in w for w in point["warnings"])
    assert math.isfinite(reading.voltage)
    assert reading.voltage >= ECOSENSE_1KW.low_voltage_shutdown


def test_area_specific_resistance_replaces_membrane_model(T_30C) -> None:
    asr_stack = FuelCellModel(replace(ECOSENSE_1KW, area_specific_resistance=0.2))

    delta_v, resistance = asr_stack.ohmic_overpotential(7.6, T_30C)

    assert resistance == pytest.approx(0.2 / 76.0)
    assert delta_v == pytest.approx(0.02)


def test_breakdown_reports_loss_components(model, T_30C) -> None:
    point = model.breakdown(8.5, T_30C)

    for key in ("E_nernst", "eta_act", "eta_ohm", "eta_con", "R_ion", "V_cell", "P_H2"):
        assert key in point
    assert point["current_stack"] == pytest.approx(point["current_ext"] + 0.3)
    assert point["P_H2"] == pytest.approx(8.5 / 60000.0 * 0.0899 * 120.0e6)


def test_variant_current_is_feed_limited(variant_model, T_30C) -> None:
    reading = variant_model.evaluate(8.5, T_30C)

    assert reading.current == pytest.approx(29.31, abs=0.02)


def test_variant_current_is_capped_by_transport_limit(variant_model, T_30C) -> None:
    reading = variant_model.evaluate(15.0, T_30C)

    assert reading.current == pytest.approx(0.6 * 76.0 * 0.999, abs=0.01)
    assert reading.voltage >= H500XP.low_voltage_shutdown


def test_variant_aux_power_interpolates_over_temperature(variant_model, model) -> None:
    assert variant_model.aux_power(296.0) == pytest.approx(36.5)
    assert variant_model.aux_power(338.0) == pytest.approx(52.0)
    assert variant_model.aux_power(317.0) == pytest.approx(44.25)
    assert variant_model.aux_power(400.0) == pytest.approx(52.0)
    assert model.aux_power(317.0) == 0.0


def test_sweep_from_zero_to_target(variant_model, T_30C) -> None:
    df = variant_model.sweep(15.0, T_30C)

    assert len(df) == 21
    assert df["flow_rate_L_min"].iloc[0] == 0.0
    assert df["flow_rate_L_min"].iloc[-1] == 15.0
    assert df["current_A"].iloc[0] == 0.0
    assert df["efficiency_pct"].iloc[0] == 0.0
    assert (df["current_A"] <= 45.56).all()
    assert (np.diff(df["current_A"].to_numpy()) >= 0).all()
    assert df[["voltage_V", "current_A", "power_W", "efficiency_pct"]].notna().all().all()


def test_sweep_rejects_bad_arguments(model, T_30C) -> None:
    with pytest.raises(ValueError):
        model.sweep(0.0, T_30C)
    with pytest.raises(ValueError):
        model.sweep(10.0, T_30C, n_points=1)


def test_check_safety_limits(model) -> None:
    safe = model.check_safety_limits(voltage=28.8, current=35.0, temperature_c=30.0)
    unsafe = model.check_safety_limits(voltage=20.0, current=45.0, temperature_c=70.0)

    assert safe.all_safe
    assert not unsafe.voltage_safe
    assert not unsafe.current_safe
    assert not unsafe.temperature_safe
    assert not unsafe.all_safe


def test_model_is_stateless(model, T_30C) -> None:
    first = model.evaluate(6.0, T_30C)
    model.evaluate(12.0, 338.15)
    second = model.evaluate(6.0, T_30C)

    assert first == second
    assert first.id != second.id
