"""Error taxonomy for the mediation dispatch layer.

Every error raised by this package derives from `HimaError`. Errors raised
inside an estimator are never wrapped and reach the caller unchanged.
"""


class HimaError(Exception):
    """Base class for all errors raised by hima."""


class InvalidParameterError(HimaError, ValueError):
    """A scalar option is outside its valid range."""


class InvalidEnumError(InvalidParameterError):
    def __init__(self, param: str, value: object, allowed: list[str]):
        self.param = param
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Invalid {param}: {value!r}. Expected one of: {', '.join(allowed)}"
        )


class MalformedSpecError(HimaError, ValueError):
    """The model specification cannot be split into its roles."""


class MissingColumnError(HimaError, KeyError):
    def __init__(self, missing: list[str], available: list[str]):
        self.missing = missing
        self.available = available
        super().__init__(missing)

    def __str__(self) -> str:
        return (
            f"Columns not found in phenotype table: {', '.join(self.missing)}. "
            f"Available: {', '.join(self.available)}"
        )


class DimensionMismatchError(HimaError, ValueError):
    """Input tables do not share the same samples along their rows."""


class UnsupportedCombinationError(HimaError, ValueError):
    """No pipeline exists for the given outcome/mediator families."""


class EstimatorNotRegisteredError(HimaError, LookupError):
    """No estimator has been registered for the selected pipeline."""


class EstimatorOutputError(HimaError, ValueError):
    """An estimator returned a table without the expected fields or shape."""
