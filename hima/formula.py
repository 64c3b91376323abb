"""Parse mediation model formulas into named roles.

Accepted forms:

    Outcome ~ Exposure + Cov1 + Cov2
    Surv(Status, Time) ~ Exposure + Cov1

The exposure is the first variable on the right-hand side; the remaining
variables are covariates in declaration order. Names that are not plain
identifiers can be quoted with backticks (`` `Age at visit` ``).
"""

import logging
import re

from hima.errors import MalformedSpecError
from hima.models import ModelSpec

log = logging.getLogger(__name__)

_NAME_RE = re.compile(r"`(?P<quoted>[^`]+)`|(?P<name>[A-Za-z_.][A-Za-z0-9_.]*)")
_SURV_RE = re.compile(r"Surv\s*\((?P<args>.*)\)", re.DOTALL)


def _split_top(text: str, sep: str) -> list[str]:
    """Split on `sep`, ignoring separators inside backtick-quoted names."""
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    for ch in text:
        if ch == "`":
            quoted = not quoted
        if ch == sep and not quoted:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def _parse_name(token: str, spec: str) -> str:
    m = _NAME_RE.fullmatch(token.strip())
    if not m:
        raise MalformedSpecError(f"{token.strip()!r} in {spec!r} is not a variable name")
    return m.group("quoted") or m.group("name")


def _parse_terms(rhs: str, spec: str) -> list[str]:
    if not rhs.strip():
        raise MalformedSpecError(f"No exposure on the right-hand side of {spec!r}")
    names = []
    for term in _split_top(rhs, "+"):
        if not term.strip():
            raise MalformedSpecError(f"Empty term on the right-hand side of {spec!r}")
        names.append(_parse_name(term, spec))
    return names


def _is_survival_response(lhs: str) -> bool:
    return bool(_SURV_RE.fullmatch(lhs)) or len(_split_top(lhs, ",")) > 1


def _parse_survival_response(lhs: str, spec: str) -> tuple[str, str]:
    m = _SURV_RE.fullmatch(lhs)
    args = m.group("args") if m else lhs
    parts = [p for p in _split_top(args, ",") if p.strip()]
    if len(parts) != 2:
        raise MalformedSpecError(
            f"Survival response in {spec!r} must name exactly two variables "
            f"(status, time), got {len(parts)}"
        )
    status, time = (_parse_name(p, spec) for p in parts)
    return status, time


def parse(spec: str | ModelSpec, is_survival: bool) -> ModelSpec:
    """Decompose a model formula into outcome, exposure and covariate roles.

    A pre-built ModelSpec is returned as-is once its response form has been
    checked against `is_survival`.
    """
    if isinstance(spec, ModelSpec):
        if spec.is_survival != is_survival:
            kind = "a survival" if is_survival else "a single-outcome"
            raise MalformedSpecError(f"Outcome family requires {kind} response, got {spec!r}")
        return spec
    if not isinstance(spec, str):
        raise MalformedSpecError(
            f"Model spec must be a formula string or ModelSpec, got {type(spec).__name__}"
        )

    sides = _split_top(spec, "~")
    if len(sides) != 2:
        raise MalformedSpecError(f"Expected exactly one '~' in {spec!r}")
    lhs, rhs = sides[0].strip(), sides[1]
    if not lhs:
        raise MalformedSpecError(f"Empty left-hand side in {spec!r}")

    exposure, *covariates = _parse_terms(rhs, spec)

    if is_survival:
        status, time = _parse_survival_response(lhs, spec)
        parsed = ModelSpec(
            status_name=status,
            time_name=time,
            exposure_name=exposure,
            covariate_names=tuple(covariates),
        )
    else:
        if _is_survival_response(lhs):
            raise MalformedSpecError(
                f"{lhs!r} is a survival response; use outcome_family='survival'"
            )
        parsed = ModelSpec(
            outcome_name=_parse_name(lhs, spec),
            exposure_name=exposure,
            covariate_names=tuple(covariates),
        )

    log.debug("Parsed %r into %s", spec, parsed)
    return parsed
