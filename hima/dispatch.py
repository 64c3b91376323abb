"""Top-level entry point: parse, route, slice, estimate, assemble."""

import logging
import numbers
from collections.abc import Callable, Mapping

import pandas as pd

from hima import formula as formula_parser
from hima.assemble import assemble
from hima.config import settings
from hima.errors import InvalidParameterError
from hima.estimators import get_estimator
from hima.models import (
    EstimationOptions,
    MediatorFamily,
    ModelSpec,
    OutcomeFamily,
    Penalty,
    PipelineKind,
    coerce_enum,
)
from hima.pipelines import progress_level, run_pipeline
from hima.pipelines.models import MediationResult
from hima.routing import route
from hima.tables import build_request

log = logging.getLogger(__name__)


def _resolve_options(
    outcome_family, mediator_family, penalty, top_n, scale, verbose
) -> EstimationOptions:
    """Fill unset options from settings and validate them."""
    defaults = settings.defaults
    outcome = coerce_enum(
        OutcomeFamily,
        defaults.outcome_family if outcome_family is None else outcome_family,
        "outcome_family",
    )
    mediator = coerce_enum(
        MediatorFamily,
        defaults.mediator_family if mediator_family is None else mediator_family,
        "mediator_family",
    )
    pen = coerce_enum(Penalty, defaults.penalty if penalty is None else penalty, "penalty")

    if top_n is not None and (
        isinstance(top_n, bool) or not isinstance(top_n, numbers.Integral) or top_n < 1
    ):
        raise InvalidParameterError(f"top_n must be a positive integer, got {top_n!r}")

    return EstimationOptions(
        outcome_family=outcome,
        mediator_family=mediator,
        penalty=pen,
        top_n=None if top_n is None else int(top_n),
        scale=defaults.scale if scale is None else bool(scale),
        verbose=defaults.verbose if verbose is None else bool(verbose),
        fdr_cutoff=settings.estimation.fdr_cutoff,
        parallel=settings.estimation.parallel,
        ncore=settings.estimation.ncore,
    )


def run(
    formula: str | ModelSpec,
    data_pheno: pd.DataFrame,
    data_m,
    outcome_family: OutcomeFamily | str | None = None,
    mediator_family: MediatorFamily | str | None = None,
    penalty: Penalty | str | None = None,
    top_n: int | None = None,
    scale: bool | None = None,
    verbose: bool | None = None,
    *,
    estimators: Mapping[PipelineKind | str, Callable] | None = None,
) -> MediationResult:
    """Estimate and test high-dimensional mediation effects.

    Args:
        formula: "Outcome ~ Exposure + covariates" or, for survival outcomes,
            "Surv(Status, Time) ~ Exposure + covariates". The exposure must be
            the first right-hand-side variable. A ModelSpec is accepted too.
        data_pheno: phenotype table holding every variable named in `formula`.
        data_m: mediator table or 2-D array; rows are the same samples, in the
            same order, as `data_pheno`.
        outcome_family: "gaussian", "binomial" or "survival".
        mediator_family: "gaussian", "negbin" (RNA-seq counts) or
            "compositional" (microbiome). Ignored for survival outcomes.
        penalty: "DBlasso", "MCP", "SCAD" or "lasso"; used by the standard
            pipeline only.
        top_n: mediators kept by screening; the estimator chooses when unset.
        scale: let the estimator standardize its inputs.
        verbose: report progress at INFO level on the "hima" logger. Nothing
            is printed unless the caller configures logging, e.g.
            logging.basicConfig(level=logging.INFO).
        estimators: per-call estimator overrides keyed by pipeline kind.

    Returns:
        MediationResult with one row per reported mediator.

    Unset options fall back to the HIMA_DEFAULTS__* settings.
    """
    options = _resolve_options(outcome_family, mediator_family, penalty, top_n, scale, verbose)
    spec = formula_parser.parse(formula, options.outcome_family is OutcomeFamily.SURVIVAL)
    kind = route(options.outcome_family, options.mediator_family)

    warnings: list[str] = []
    if kind is PipelineKind.SURVIVAL and options.mediator_family is MediatorFamily.COMPOSITIONAL:
        msg = (
            "mediator_family='compositional' is not supported with survival outcomes; "
            "mediators are passed to the survival estimator unchanged"
        )
        log.warning(msg)
        warnings.append(msg)
    if kind is not PipelineKind.STANDARD and options.penalty is not Penalty.DBLASSO:
        log.debug("penalty=%s is ignored by the %s pipeline", options.penalty.value, kind.value)

    request = build_request(spec, data_pheno, data_m)
    estimator = get_estimator(kind, estimators)
    raw = run_pipeline(kind, request, options, estimator)
    result = assemble(kind, raw, request.mediator_ids)

    log.log(
        progress_level(options.verbose),
        "%s pipeline reported %d mediator(s)",
        kind.value,
        result.n_mediators,
    )
    if warnings:
        result = result.model_copy(update={"warnings": warnings})
    return result
