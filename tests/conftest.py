"""Shared test fixtures."""

import pytest

from punnett_engine import (
    AggregationMode,
    CalculatorConfig,
    GenotypeProbabilityEngine,
    ParseMode,
)


@pytest.fixture
def engine():
    return GenotypeProbabilityEngine()


@pytest.fixture
def loci_engine():
    return GenotypeProbabilityEngine(CalculatorConfig(parse_mode=ParseMode.LOCI))


@pytest.fixture
def joint_engine():
    return GenotypeProbabilityEngine(CalculatorConfig(aggregation=AggregationMode.JOINT))


@pytest.fixture
def client():
    from api import app

    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
