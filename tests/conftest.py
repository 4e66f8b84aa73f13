"""Shared fixtures: a profitable, an unprofitable and a short two-period business case."""

import pytest

from core.schema import ROICalculationInputs


@pytest.fixture
def profitable_inputs():
    return ROICalculationInputs(
        initial_investment=100_000,
        annual_benefits=(50_000, 60_000, 70_000),
        discount_rate=0.10,
        time_horizon=3,
        risk_factor=0.2,
    )


@pytest.fixture
def unprofitable_inputs():
    return ROICalculationInputs(
        initial_investment=200_000,
        annual_benefits=(10_000, 10_000, 10_000),
        discount_rate=0.10,
        time_horizon=3,
        risk_factor=0.2,
    )


@pytest.fixture
def two_period_inputs():
    return ROICalculationInputs(
        initial_investment=50_000,
        annual_benefits=(30_000, 40_000),
        discount_rate=0.0,
        time_horizon=2,
    )


@pytest.fixture
def benefit_ranges():
    return {
        "annual_benefits": {"min": 0.8, "max": 1.2},
        "initial_investment": {"min": 0.9, "max": 1.1},
        "discount_rate": {"min": 0.5, "max": 1.5},
    }
