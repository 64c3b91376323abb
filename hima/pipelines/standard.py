"""Standard high-dimensional mediation (continuous or count mediators).

The estimator screens mediators by sure independence screening, refits the
survivors with a penalized model and tests each joint alpha*beta path.
"""

import logging
import math
from collections.abc import Callable

import pandas as pd

from hima.models import AnalysisRequest, EstimationOptions, OutcomeFamily, PipelineKind
from hima.pipelines import as_frame, progress_level, register

log = logging.getLogger(__name__)


def default_screening_size(n_samples: int, outcome_family: OutcomeFamily) -> int:
    """Mediators kept by screening when top_n is unset.

    ceil(n / log n) for gaussian outcomes, ceil(n / (2 log n)) for binomial.
    """
    if n_samples < 2:
        return n_samples
    denom = math.log(n_samples)
    if outcome_family is OutcomeFamily.BINOMIAL:
        denom *= 2
    return math.ceil(n_samples / denom)


@register(PipelineKind.STANDARD)
def standard_pipeline(
    request: AnalysisRequest, options: EstimationOptions, estimator: Callable
) -> pd.DataFrame:
    level = progress_level(options.verbose)
    screen = options.top_n or default_screening_size(request.n_samples, options.outcome_family)
    if request.n_mediators <= screen:
        log.log(level, "Low-dimensional setting: all %d mediators will be tested", request.n_mediators)
    else:
        log.log(
            level,
            "Screening %d mediators down to the top %d (penalty=%s)",
            request.n_mediators,
            screen,
            options.penalty.value,
        )

    raw = estimator(
        exposure=request.exposure,
        outcome=request.outcome,
        mediators=request.mediators,
        covariates=request.covariates,
        outcome_family=options.outcome_family.value,
        penalty=options.penalty.value,
        top_n=options.top_n,
        parallel=options.parallel,
        ncore=options.ncore,
        scale=options.scale,
        verbose=options.verbose,
    )
    return as_frame(raw, PipelineKind.STANDARD)
