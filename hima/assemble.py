"""Build the final MediationResult from an estimator table.

The standard table passes through untouched. Compositional and survival
tables are projected onto alpha, alpha_se, beta, beta_se, p and indexed by
the estimator's mediator IDs. Rows are never dropped or reordered here.
"""

import logging
from collections.abc import Iterable

import pandas as pd

from hima.errors import EstimatorOutputError
from hima.models import PipelineKind
from hima.pipelines.models import (
    EFFECT_COLUMNS,
    EFFECT_LABELS,
    STANDARD_COLUMNS,
    STANDARD_LABELS,
    MediationResult,
)

log = logging.getLogger(__name__)

# Estimator field holding the p value, per pipeline
_P_FIELDS = {
    PipelineKind.COMPOSITIONAL: "p_FDP",
    PipelineKind.SURVIVAL: "pvalue",
}


def _standard_table(raw: pd.DataFrame) -> pd.DataFrame:
    if raw.shape[1] == 0 and len(raw) == 0:
        return pd.DataFrame(columns=STANDARD_COLUMNS, dtype=float)
    if raw.shape[1] != len(STANDARD_LABELS):
        raise EstimatorOutputError(
            f"standard estimator returned {raw.shape[1]} columns, "
            f"expected {len(STANDARD_LABELS)}: {', '.join(STANDARD_COLUMNS)}"
        )
    return raw


def _effect_table(kind: PipelineKind, raw: pd.DataFrame) -> pd.DataFrame:
    if raw.shape[1] == 0 and len(raw) == 0:
        return pd.DataFrame(columns=EFFECT_COLUMNS, dtype=float)

    p_field = _P_FIELDS[kind]
    fields = ["ID", "alpha", "alpha_se", "beta", "beta_se", p_field]
    missing = [f for f in fields if f not in raw.columns]
    if missing:
        raise EstimatorOutputError(
            f"{kind.value} estimator output is missing fields: {', '.join(missing)}"
        )

    sources = ["alpha", "alpha_se", "beta", "beta_se", p_field]
    return pd.DataFrame(
        {col: raw[src].to_numpy() for col, src in zip(EFFECT_COLUMNS, sources)},
        index=pd.Index(raw["ID"].to_numpy()),
    )


def assemble(
    kind: PipelineKind,
    raw: pd.DataFrame,
    mediator_ids: Iterable[str] | None = None,
) -> MediationResult:
    """Attach row identifiers and column labels to an estimator table.

    When `mediator_ids` is given, every row must name one of those mediators.
    """
    if kind is PipelineKind.STANDARD:
        table = _standard_table(raw)
        labels = list(STANDARD_LABELS)
    else:
        table = _effect_table(kind, raw)
        labels = list(EFFECT_LABELS)

    if len(table) != len(raw):
        raise EstimatorOutputError(
            f"Assembled {len(table)} rows from {len(raw)} estimator rows"
        )

    if mediator_ids is not None:
        known = {str(m) for m in mediator_ids}
        unknown = [i for i in table.index if str(i) not in known]
        if unknown:
            raise EstimatorOutputError(
                f"{kind.value} estimator reported {len(unknown)} unknown mediator(s): "
                f"{', '.join(str(u) for u in unknown[:5])}"
            )

    log.debug("Assembled %s result: %d rows x %d columns", kind.value, *table.shape)
    return MediationResult(pipeline=kind, table=table, variable_labels=labels)
