"""Exceptions raised by the analysis pipeline."""


class AnalysisError(Exception):
    """
    Base class for errors surfaced to callers of the pipeline.

    Attributes:
        error_code: Machine-readable code used in API error responses
        message: Human-readable description
    """

    error_code = "ANALYSIS_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyPageSetError(AnalysisError):
    """Raised when an analysis is requested for zero pages."""

    error_code = "NO_PAGES"

    def __init__(self, message: str = "At least one page is required for analysis"):
        super().__init__(message)
