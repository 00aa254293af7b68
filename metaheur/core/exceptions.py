"""
Custom exceptions for the metaheuristic search framework.
Provides specific exception classes for the different failure modes of a run.
"""


class MetaheuristicError(Exception):
    """Base exception for the search framework."""

    def __init__(self, message: str = "", details: dict = None):
        """
        Initialize framework exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class GeneratorExhausted(MetaheuristicError):
    """Raised when no candidate can be produced from the incumbent.

    Recovered locally by the orchestrator: it advances the neighborhood
    index or stops the run, it never aborts a search.
    """

    def __init__(self, neighborhood: int = None, reason: str = None):
        """
        Initialize exhaustion signal.

        Args:
            neighborhood: Neighborhood index that produced nothing (1-based)
            reason: Why no candidate was produced
        """
        message = "Candidate generator exhausted"
        details = {}

        if neighborhood is not None:
            details['neighborhood'] = neighborhood
            message += f" in neighborhood {neighborhood}"
        if reason:
            details['reason'] = reason
            message += f" ({reason})"

        super().__init__(message, details)


class InvalidConfigurationError(MetaheuristicError):
    """Raised when configuration parameters are invalid."""

    def __init__(self, parameter: str = None, value: any = None,
                 expected: str = None):
        """
        Initialize invalid configuration error.

        Args:
            parameter: Parameter name
            value: Invalid value
            expected: Expected value or range
        """
        message = "Invalid configuration parameter"
        details = {}

        if parameter:
            details['parameter'] = parameter
        if value is not None:
            details['value'] = value
        if expected:
            details['expected'] = expected

        if parameter:
            message += f": {parameter} = {value}"
            if expected:
                message += f" (expected: {expected})"

        super().__init__(message, details)


class UserCallbackFailure(MetaheuristicError):
    """Raised when a user-supplied capability fails during a run.

    The partial result keeps the best solution found before the failure,
    so progress is never lost. The original exception is chained as
    ``__cause__``.
    """

    def __init__(self, stage: str = None, partial_result=None,
                 reason: str = None):
        """
        Initialize callback failure.

        Args:
            stage: Search stage that was running (generate, evaluate, ...)
            partial_result: RunResult holding the best solution so far
            reason: Message of the underlying exception
        """
        message = "User callback failed"
        details = {}

        if stage:
            details['stage'] = stage
            message += f" during '{stage}'"
        if reason:
            details['reason'] = reason
            message += f": {reason}"
        if partial_result is not None:
            details['iterations'] = partial_result.iterations
            details['best_objective'] = partial_result.best_objective

        super().__init__(message, details)
        self.stage = stage
        self.partial_result = partial_result
