"""
Exception hierarchy for the bandar target ranking.

Request-level errors (ValidationError, UpstreamUnavailableError) abort the whole
ranking run. PerSymbolAnalysisError and its subclasses only fail one symbol; the
orchestrator turns them into a sentinel row.
"""


class RankingError(Exception):
    """Base exception for the ranking pipeline."""
    pass


class ValidationError(RankingError):
    """Missing required parameter or unknown ranking mode."""
    pass


class UpstreamUnavailableError(RankingError):
    """Universe could not be resolved from the upstream provider."""
    pass


class PerSymbolAnalysisError(RankingError):
    pass


class NoBrokerDataError(PerSymbolAnalysisError):
    def __init__(self, message: str = "No broker data available"):
        super().__init__(message)


class MalformedOrderBookError(PerSymbolAnalysisError):
    pass
