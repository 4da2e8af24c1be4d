from __future__ import annotations

import pytest

from pemfc_lab import ECOSENSE_1KW, H500XP, FuelCellModel, Reading, ReadingLog


@pytest.fixture()
def model() -> FuelCellModel:
    return FuelCellModel(ECOSENSE_1KW)


@pytest.fixture()
def variant_model() -> FuelCellModel:
    return FuelCellModel(H500XP)


@pytest.fixture()
def T_30C() -> float:
    return 303.15


@pytest.fixture()
def log() -> ReadingLog:
    return ReadingLog()


@pytest.fixture()
def make_reading():
    def _make(flow_rate: float, voltage: float = 24.0, efficiency: float = 35.0) -> Reading:
        return Reading(
            flow_rate=flow_rate,
            temperature_k=303.15,
            voltage=voltage,
            current=round(flow_rate / 13.0 * 35.0, 2),
            efficiency=efficiency,
        )
    return _make
