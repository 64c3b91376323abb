"""Mediation through compositional mediators (e.g. microbiome abundances)."""

import logging
from collections.abc import Callable

import pandas as pd

from hima.models import AnalysisRequest, EstimationOptions, PipelineKind
from hima.pipelines import as_frame, progress_level, register

log = logging.getLogger(__name__)


@register(PipelineKind.COMPOSITIONAL)
def compositional_pipeline(
    request: AnalysisRequest, options: EstimationOptions, estimator: Callable
) -> pd.DataFrame:
    log.log(
        progress_level(options.verbose),
        "Compositional mediators: %d taxa, FDR cutoff %.3g",
        request.n_mediators,
        options.fdr_cutoff,
    )

    # The estimator owns row filtering at fdr_cutoff
    raw = estimator(
        exposure=request.exposure,
        outcome=request.outcome,
        mediators=request.mediators,
        covariates=request.covariates,
        fdr_cutoff=options.fdr_cutoff,
        scale=options.scale,
    )
    return as_frame(raw, PipelineKind.COMPOSITIONAL)
