import pandas as pd
from pydantic import BaseModel, ConfigDict, model_validator

from hima.models import PipelineKind

# Column order of the standard estimator's table
STANDARD_COLUMNS = [
    "alpha",
    "beta",
    "gamma",
    "alpha*beta",
    "% total effect",
    "Bonferroni.p",
    "BH.FDR",
]

STANDARD_LABELS = [
    "Effect of exposure on mediator",
    "Effect of mediator on outcome",
    "Total effect of exposure on outcome",
    "Mediation effect",
    "Percent of mediation effect out of the total effect",
    "Bonferroni adjusted p value",
    "Benjamini-Hochberg False Discovery Rate",
]

EFFECT_COLUMNS = ["alpha", "alpha_se", "beta", "beta_se", "p"]

EFFECT_LABELS = [
    "Effect of exposure on mediator",
    "Standard error of the effect of exposure on mediator",
    "Effect of mediator on outcome",
    "Standard error of the effect of mediator on outcome",
    "p value",
]


class MediationResult(BaseModel):
    """Per-mediator results of one pipeline run.

    `table` is indexed by mediator identifier; `variable_labels` describes
    its columns in order.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    pipeline: PipelineKind
    table: pd.DataFrame
    variable_labels: list[str]
    warnings: list[str] = []  # routing notes, e.g. an ignored mediator family

    @model_validator(mode="after")
    def _labels_match_columns(self):
        if len(self.variable_labels) != self.table.shape[1]:
            raise ValueError(
                f"{len(self.variable_labels)} labels for {self.table.shape[1]} columns"
            )
        return self

    @property
    def n_mediators(self) -> int:
        return len(self.table)

    @property
    def labels(self) -> dict[str, str]:
        return dict(zip(self.table.columns, self.variable_labels))

    def to_frame(self) -> pd.DataFrame:
        """Copy of the table with the labels in `attrs["variable.labels"]`."""
        frame = self.table.copy()
        frame.attrs["variable.labels"] = list(self.variable_labels)
        return frame
