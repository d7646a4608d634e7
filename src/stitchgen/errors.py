"""
Exception types for the stitchgen package.

- StitchGenError: base class for everything raised by the package
- InvalidArgument: missing or malformed input, surfaced immediately
- NotFoundError: chunk or context is not part of the level
- InvalidOperation: operation not allowed in the current state
- GenerationExhausted: retry/backtrack budget ran out (opt-in, see GenerationResult)
- ValidationError: level validation produced FAIL issues (opt-in)
"""

from typing import Any


class StitchGenError(Exception):
    pass


class InvalidArgument(StitchGenError, ValueError):
    pass


class NotFoundError(StitchGenError, LookupError):
    pass


class InvalidOperation(StitchGenError, RuntimeError):
    pass


class GenerationExhausted(StitchGenError):
    """Raised on request when generation stopped because its budget ran out.

    Attributes:
        result: The GenerationResult of the run that ran out of budget
    """

    def __init__(self, result: Any, message: str = ""):
        self.result = result
        super().__init__(message or "Level generation exhausted its budget")


class ValidationError(StitchGenError):
    """Raised when level validation fails with FAIL severity issues.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: Any):
        self.result = result
        super().__init__(result.report())
