"""Pipeline selection from outcome and mediator families.

| outcome              | mediator           | pipeline      |
|----------------------|--------------------|---------------|
| gaussian / binomial  | gaussian / negbin  | standard      |
| gaussian / binomial  | compositional      | compositional |
| survival             | any                | survival      |
"""

from hima.errors import UnsupportedCombinationError
from hima.models import MediatorFamily, OutcomeFamily, PipelineKind


def route(outcome_family: OutcomeFamily, mediator_family: MediatorFamily) -> PipelineKind:
    """Return the pipeline for an outcome/mediator family pair.

    Survival outcomes take precedence: the mediator family is not consulted.
    """
    if not isinstance(outcome_family, OutcomeFamily):
        raise UnsupportedCombinationError(f"Unknown outcome family: {outcome_family!r}")
    if outcome_family is OutcomeFamily.SURVIVAL:
        return PipelineKind.SURVIVAL

    if not isinstance(mediator_family, MediatorFamily):
        raise UnsupportedCombinationError(f"Unknown mediator family: {mediator_family!r}")
    if mediator_family is MediatorFamily.COMPOSITIONAL:
        return PipelineKind.COMPOSITIONAL
    return PipelineKind.STANDARD
