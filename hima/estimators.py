"""Registry of the external mediation estimators each pipeline delegates to.

Estimators are plain callables invoked with keyword arguments:

    standard(exposure, outcome, mediators, covariates, outcome_family,
             penalty, top_n, parallel, ncore, scale, verbose)
        -> table of 7 columns indexed by mediator id

    compositional(exposure, outcome, mediators, covariates, fdr_cutoff, scale)
        -> fields ID, alpha, alpha_se, beta, beta_se, p_FDP

    survival(exposure, covariates, mediators, event_time, event_status,
             fdr_cutoff, scale, verbose)
        -> fields ID, alpha, alpha_se, beta, beta_se, pvalue

Tables may be DataFrames or mappings of field name to column values.
Register with the decorator:

    @register_estimator("survival")
    def surv_hima(exposure, covariates, mediators, event_time, ...):
        ...

Modules listed in HIMA_ESTIMATION__PLUGINS are imported before the first
lookup so they can register themselves.
"""

import importlib
import logging
from collections.abc import Callable, Mapping

from hima.config import settings
from hima.errors import EstimatorNotRegisteredError
from hima.models import PipelineKind, coerce_enum

log = logging.getLogger(__name__)

_ESTIMATORS: dict[PipelineKind, Callable] = {}
_plugins_loaded = False


def set_estimator(kind: PipelineKind | str, fn: Callable) -> None:
    kind = coerce_enum(PipelineKind, kind, "pipeline")
    _ESTIMATORS[kind] = fn
    log.info("Registered %s estimator: %s", kind.value, getattr(fn, "__qualname__", fn))


def register_estimator(kind: PipelineKind | str):
    """Decorator to register the estimator behind a pipeline."""

    def decorator(fn):
        set_estimator(kind, fn)
        return fn

    return decorator


def clear_estimators() -> None:
    _ESTIMATORS.clear()


def registered_estimators() -> dict[PipelineKind, Callable]:
    return dict(_ESTIMATORS)


def load_plugins(modules: list[str] | None = None) -> None:
    """Import estimator plugin modules.

    Without arguments the configured plugin list is imported once per process.
    """
    global _plugins_loaded
    configured = modules is None
    if configured:
        if _plugins_loaded:
            return
        modules = settings.estimation.plugins
    for name in modules:
        log.info("Loading estimator plugin: %s", name)
        importlib.import_module(name)
    # Set once every configured plugin has imported
    if configured:
        _plugins_loaded = True


def get_estimator(
    kind: PipelineKind,
    overrides: Mapping[PipelineKind | str, Callable] | None = None,
) -> Callable:
    """Return the estimator for `kind`, preferring per-call overrides."""
    for key, fn in (overrides or {}).items():
        if coerce_enum(PipelineKind, key, "estimators") is kind:
            return fn

    load_plugins()
    try:
        return _ESTIMATORS[kind]
    except KeyError:
        raise EstimatorNotRegisteredError(
            f"No estimator registered for the {kind.value} pipeline. "
            f"Register one with hima.estimators.register_estimator({kind.value!r}) "
            f"or pass estimators={{{kind.value!r}: fn}}."
        ) from None
