"""Turn caller tables into an AnalysisRequest.

Samples are aligned by position, never by index label: every slice is
re-indexed 0..n-1 so that pandas alignment in an estimator cannot shuffle
rows between the phenotype and mediator tables.
"""

import logging

import numpy as np
import pandas as pd

from hima.errors import DimensionMismatchError, MissingColumnError
from hima.models import AnalysisRequest, ModelSpec

log = logging.getLogger(__name__)


def as_mediator_frame(data_m) -> pd.DataFrame:
    """Return the mediator matrix as a DataFrame with one column per mediator.

    Plain 2-D arrays get identifiers M1..Mm.
    """
    if isinstance(data_m, pd.DataFrame):
        frame = data_m
    else:
        values = np.asarray(data_m)
        if values.ndim != 2:
            raise DimensionMismatchError(
                f"Mediator table must be 2-dimensional, got {values.ndim} dimension(s)"
            )
        frame = pd.DataFrame(values, columns=[f"M{i}" for i in range(1, values.shape[1] + 1)])

    if frame.shape[1] == 0:
        raise DimensionMismatchError("Mediator table has no columns")
    return frame


def _column(data_pheno: pd.DataFrame, name: str) -> pd.Series:
    return data_pheno[name].reset_index(drop=True)


def build_request(spec: ModelSpec, data_pheno: pd.DataFrame, data_m) -> AnalysisRequest:
    """Slice the phenotype table into the roles named by `spec`."""
    if not isinstance(data_pheno, pd.DataFrame):
        data_pheno = pd.DataFrame(data_pheno)

    missing = [c for c in dict.fromkeys(spec.column_names) if c not in data_pheno.columns]
    if missing:
        raise MissingColumnError(missing, [str(c) for c in data_pheno.columns])

    mediators = as_mediator_frame(data_m)
    if len(data_pheno) != len(mediators):
        raise DimensionMismatchError(
            f"Phenotype table has {len(data_pheno)} rows but mediator table has "
            f"{len(mediators)}; rows must be the same samples in the same order"
        )

    covariates = None
    if spec.covariate_names:
        covariates = data_pheno.loc[:, list(spec.covariate_names)].reset_index(drop=True)

    if spec.is_survival:
        response = {
            "status": _column(data_pheno, spec.status_name),
            "time": _column(data_pheno, spec.time_name),
        }
    else:
        response = {"outcome": _column(data_pheno, spec.outcome_name)}

    request = AnalysisRequest(
        exposure=_column(data_pheno, spec.exposure_name),
        mediators=mediators.reset_index(drop=True),
        covariates=covariates,
        **response,
    )
    log.debug(
        "Built request: n=%d, mediators=%d, covariates=%d",
        request.n_samples,
        request.n_mediators,
        0 if covariates is None else covariates.shape[1],
    )
    return request
