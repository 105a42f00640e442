"""
Error taxonomy for the matchmaking core.

- ValidationError: bad or missing request fields (HTTP 400, message surfaced as-is)
- RetrievalError: the business store could not be queried (HTTP 500, sanitized)
- ScoringDegraded: an optional scoring input is unavailable; never fails a request
- AnalyticsWriteError: analytics could not be recorded; logged and swallowed
"""


class MatchmakingError(Exception):
    """Base exception for matchmaking core errors."""
    pass


class ValidationError(MatchmakingError):
    """Raised when a request is malformed or misses a required field."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class UnknownTaskError(ValidationError):
    """Raised when the router receives a task name it does not serve."""

    def __init__(self, task: str):
        super().__init__(f"Unknown task: {task}", field="task")
        self.task = task


class RetrievalError(MatchmakingError):
    """Raised when the persistence layer is unreachable or a query fails."""
    pass


class ScoringDegraded(MatchmakingError):
    """Raised by optional score inputs (embeddings, success predictor) when unavailable."""
    pass


class AnalyticsWriteError(MatchmakingError):
    """Raised when a search analytics row cannot be written."""
    pass
