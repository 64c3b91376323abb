from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

from hima.errors import InvalidEnumError


class OutcomeFamily(str, Enum):
    GAUSSIAN = "gaussian"
    BINOMIAL = "binomial"
    SURVIVAL = "survival"


class MediatorFamily(str, Enum):
    GAUSSIAN = "gaussian"
    NEGBIN = "negbin"  # RNA-seq counts
    COMPOSITIONAL = "compositional"  # microbiome relative abundance


class Penalty(str, Enum):
    DBLASSO = "DBlasso"
    MCP = "MCP"
    SCAD = "SCAD"
    LASSO = "lasso"

    @classmethod
    def _missing_(cls, value):
        if value == "de-biased-lasso":
            return cls.DBLASSO
        return None


class PipelineKind(str, Enum):
    STANDARD = "standard"
    COMPOSITIONAL = "compositional"
    SURVIVAL = "survival"


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: type[E], value: object, param: str) -> E:
    """Resolve `value` to a member of `enum_cls` or raise InvalidEnumError."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    raise InvalidEnumError(param, value, [m.value for m in enum_cls])


# ── Model specification ──


class ModelSpec(BaseModel):
    """Semantic roles of a mediation model.

    Either `outcome_name` is set, or both `status_name` and `time_name` are
    (survival outcome). The exposure is always required; covariates keep the
    order in which they were declared.
    """

    model_config = ConfigDict(frozen=True)

    outcome_name: str | None = None
    status_name: str | None = None
    time_name: str | None = None
    exposure_name: str
    covariate_names: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_response(self):
        survival = self.status_name is not None or self.time_name is not None
        if survival:
            if self.outcome_name is not None:
                raise ValueError("outcome_name cannot be combined with status/time")
            if self.status_name is None or self.time_name is None:
                raise ValueError("survival specs need both status_name and time_name")
        elif self.outcome_name is None:
            raise ValueError("outcome_name is required for non-survival specs")
        return self

    @property
    def is_survival(self) -> bool:
        return self.status_name is not None

    @property
    def response_names(self) -> tuple[str, ...]:
        if self.is_survival:
            return (self.status_name, self.time_name)
        return (self.outcome_name,)

    @property
    def column_names(self) -> tuple[str, ...]:
        """Every phenotype column the model refers to, responses first."""
        return (*self.response_names, self.exposure_name, *self.covariate_names)


class EstimationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome_family: OutcomeFamily = OutcomeFamily.GAUSSIAN
    mediator_family: MediatorFamily = MediatorFamily.GAUSSIAN
    penalty: Penalty = Penalty.DBLASSO
    top_n: int | None = Field(None, ge=1)
    scale: bool = True
    verbose: bool = False
    fdr_cutoff: float = Field(0.05, gt=0, lt=1)
    parallel: bool = False
    ncore: int = Field(1, ge=1)


# ── Resolved numeric inputs ──


@dataclass(frozen=True)
class AnalysisRequest:
    """Phenotype roles and mediators sliced for one estimation call.

    All members share the same positional 0..n-1 row index.
    """

    exposure: pd.Series
    mediators: pd.DataFrame
    covariates: pd.DataFrame | None = None
    outcome: pd.Series | None = None
    status: pd.Series | None = None
    time: pd.Series | None = None

    @property
    def n_samples(self) -> int:
        return len(self.exposure)

    @property
    def n_mediators(self) -> int:
        return self.mediators.shape[1]

    @property
    def mediator_ids(self) -> list[str]:
        return [str(c) for c in self.mediators.columns]
