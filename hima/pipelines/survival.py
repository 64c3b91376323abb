"""Mediation with a time-to-event outcome."""

import logging
from collections.abc import Callable

import pandas as pd

from hima.models import AnalysisRequest, EstimationOptions, PipelineKind
from hima.pipelines import as_frame, progress_level, register

log = logging.getLogger(__name__)


@register(PipelineKind.SURVIVAL)
def survival_pipeline(
    request: AnalysisRequest, options: EstimationOptions, estimator: Callable
) -> pd.DataFrame:
    n_events = int((request.status != 0).sum())
    if n_events == 0:
        log.warning("No events in the status column; survival estimates will be degenerate")
    log.log(
        progress_level(options.verbose),
        "Survival outcome: %d events among %d samples",
        n_events,
        request.n_samples,
    )

    raw = estimator(
        exposure=request.exposure,
        covariates=request.covariates,
        mediators=request.mediators,
        event_time=request.time,
        event_status=request.status,
        fdr_cutoff=options.fdr_cutoff,
        scale=options.scale,
        verbose=options.verbose,
    )
    return as_frame(raw, PipelineKind.SURVIVAL)
