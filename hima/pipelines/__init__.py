import importlib
import logging
from collections.abc import Callable, Mapping

import pandas as pd

from hima.errors import EstimatorOutputError, UnsupportedCombinationError
from hima.models import AnalysisRequest, EstimationOptions, PipelineKind

log = logging.getLogger(__name__)

_REGISTRY: dict[PipelineKind, Callable] = {}

# Adapter modules, imported at bottom to auto-register
_MODULES = [
    "hima.pipelines.standard",
    "hima.pipelines.compositional",
    "hima.pipelines.survival",
]


def register(kind: PipelineKind):
    """Decorator to register a pipeline adapter."""

    def decorator(fn):
        _REGISTRY[kind] = fn
        return fn

    return decorator


def progress_level(verbose: bool) -> int:
    """Log level for progress messages: INFO when verbose, DEBUG otherwise."""
    return logging.INFO if verbose else logging.DEBUG


def as_frame(raw, kind: PipelineKind) -> pd.DataFrame:
    """Coerce an estimator's return value into a DataFrame."""
    if isinstance(raw, pd.DataFrame):
        return raw
    if isinstance(raw, Mapping):
        try:
            return pd.DataFrame(dict(raw))
        except ValueError as exc:
            raise EstimatorOutputError(
                f"{kind.value} estimator returned columns of unequal length: {exc}"
            ) from exc
    raise EstimatorOutputError(
        f"{kind.value} estimator returned {type(raw).__name__}; "
        "expected a DataFrame or a mapping of columns"
    )


def run_pipeline(
    kind: PipelineKind,
    request: AnalysisRequest,
    options: EstimationOptions,
    estimator: Callable,
) -> pd.DataFrame:
    """Dispatch to the registered adapter and return the raw estimator table."""
    fn = _REGISTRY.get(kind)
    if not fn:
        raise UnsupportedCombinationError(
            f"Unknown pipeline: {kind}. "
            f"Available: {', '.join(sorted(k.value for k in _REGISTRY))}"
        )
    log.log(
        progress_level(options.verbose),
        "Running %s pipeline (n=%d, mediators=%d)",
        kind.value,
        request.n_samples,
        request.n_mediators,
    )
    raw = fn(request, options, estimator)
    log.log(progress_level(options.verbose), "%s estimator returned %d rows", kind.value, len(raw))
    return raw


# Auto-import modules to trigger @register decorators
for _mod in _MODULES:
    importlib.import_module(_mod)
