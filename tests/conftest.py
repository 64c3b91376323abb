"""Shared fixtures for hima tests.

- Phenotype and mediator tables (n=100 samples)
- Recording fake estimators for the three pipelines
- Registry reset so tests never see each other's estimators
"""

import numpy as np
import pandas as pd
import pytest

from hima import estimators
from hima.pipelines.models import STANDARD_COLUMNS

N_SAMPLES = 100


class RecordingEstimator:
    """Callable stand-in for an external estimator.

    Records the keyword arguments of every call and returns `build(kwargs)`.
    """

    def __init__(self, build):
        self.build = build
        self.calls: list[dict] = []

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return self.build(kwargs)

    @property
    def last_call(self) -> dict:
        return self.calls[-1]


# ══════════════════════════════════════════════════════════════════════════════
# DATA FIXTURES
# ══════════════════════════════════════════════════════════════════════════════


@pytest.fixture(autouse=True)
def clean_registry(monkeypatch):
    """Empty estimator registry; configured plugins are not imported."""
    estimators.clear_estimators()
    monkeypatch.setattr(estimators, "_plugins_loaded", True)
    yield
    estimators.clear_estimators()


@pytest.fixture
def pheno() -> pd.DataFrame:
    rng = np.random.default_rng(42)
    return pd.DataFrame(
        {
            "Y": rng.normal(size=N_SAMPLES),
            "Disease": rng.binomial(1, 0.3, N_SAMPLES),
            "X": rng.binomial(1, 0.5, N_SAMPLES),
            "Sex": rng.binomial(1, 0.5, N_SAMPLES),
            "Age": rng.normal(50, 10, N_SAMPLES),
            "Status": rng.binomial(1, 0.7, N_SAMPLES),
            "Time": rng.exponential(5.0, N_SAMPLES),
        }
    )


@pytest.fixture
def mediators() -> pd.DataFrame:
    rng = np.random.default_rng(7)
    return pd.DataFrame(
        rng.normal(size=(N_SAMPLES, 500)),
        columns=[f"cg{i:05d}" for i in range(500)],
    )


@pytest.fixture
def abundances() -> pd.DataFrame:
    rng = np.random.default_rng(11)
    return pd.DataFrame(
        rng.dirichlet(np.ones(50), size=N_SAMPLES),
        columns=[f"OTU{i}" for i in range(1, 51)],
    )


# ══════════════════════════════════════════════════════════════════════════════
# ESTIMATOR FIXTURES
# ══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def standard_estimator() -> RecordingEstimator:
    """Reports the first top_n mediators (5 when top_n is unset)."""

    def _build(kwargs):
        ids = list(kwargs["mediators"].columns[: kwargs["top_n"] or 5])
        values = np.linspace(0.01, 0.5, len(ids))
        return pd.DataFrame({col: values for col in STANDARD_COLUMNS}, index=ids)

    return RecordingEstimator(_build)


@pytest.fixture
def compositional_estimator() -> RecordingEstimator:
    """Reports three taxa that pass the FDR cutoff."""

    def _build(kwargs):
        ids = list(kwargs["mediators"].columns[:3])
        return {
            "ID": ids,
            "alpha": [0.8, -0.4, 0.3],
            "alpha_se": [0.1, 0.1, 0.1],
            "beta": [0.5, 0.6, -0.2],
            "beta_se": [0.2, 0.2, 0.1],
            "p_FDP": [0.001, 0.02, 0.049],
        }

    return RecordingEstimator(_build)


@pytest.fixture
def survival_estimator() -> RecordingEstimator:
    """Reports two mediators with their own p values."""

    def _build(kwargs):
        ids = list(kwargs["mediators"].columns[[4, 1]])
        return pd.DataFrame(
            {
                "ID": ids,
                "alpha": [0.3, 0.2],
                "alpha_se": [0.05, 0.04],
                "beta": [0.4, -0.6],
                "beta_se": [0.1, 0.2],
                "pvalue": [0.003, 0.2],
            }
        )

    return RecordingEstimator(_build)


@pytest.fixture
def all_estimators(standard_estimator, compositional_estimator, survival_estimator):
    """Register the three fake estimators."""
    estimators.set_estimator("standard", standard_estimator)
    estimators.set_estimator("compositional", compositional_estimator)
    estimators.set_estimator("survival", survival_estimator)
    return {
        "standard": standard_estimator,
        "compositional": compositional_estimator,
        "survival": survival_estimator,
    }
