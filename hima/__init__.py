from hima.dispatch import run
from hima.errors import (
    DimensionMismatchError,
    EstimatorNotRegisteredError,
    EstimatorOutputError,
    HimaError,
    InvalidEnumError,
    InvalidParameterError,
    MalformedSpecError,
    MissingColumnError,
    UnsupportedCombinationError,
)
from hima.estimators import register_estimator, set_estimator
from hima.models import MediatorFamily, ModelSpec, OutcomeFamily, Penalty, PipelineKind
from hima.pipelines.models import MediationResult

hima2 = run

__all__ = [
    "DimensionMismatchError",
    "EstimatorNotRegisteredError",
    "EstimatorOutputError",
    "HimaError",
    "InvalidEnumError",
    "InvalidParameterError",
    "MalformedSpecError",
    "MediationResult",
    "MediatorFamily",
    "MissingColumnError",
    "ModelSpec",
    "OutcomeFamily",
    "Penalty",
    "PipelineKind",
    "UnsupportedCombinationError",
    "hima2",
    "register_estimator",
    "run",
    "set_estimator",
]
