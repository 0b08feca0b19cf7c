class MedTrackError(Exception):
    """Base class for every domain error raised by MedTrack."""
    pass

class DataFetchError(MedTrackError):
    """
    One of the record collections needed by the dashboard could not be loaded.
    The aggregation never continues with partial data.
    """

    def __init__(self, source: str, message: str | None = None) -> None:
        self.source = source
        super().__init__(message or f"Failed to fetch {source}")

class InsuranceNotFoundError(MedTrackError):
    """No insurance policy with the requested id."""

    def __init__(self, insurance_id: object) -> None:
        self.insurance_id = insurance_id
        super().__init__(f"Insurance not found: {insurance_id}")

class CoverageAnalysisError(MedTrackError):
    """
    The policy text could not be turned into coverage data.
    Examples:
    - no text was extracted from the PDF.
    - the model reply contains no parseable JSON object.
    - none of the configured models exists.
    """
    pass

class CoverageServiceUnavailableError(CoverageAnalysisError):
    """
    The LLM provider refused or failed the request.
    Examples:
    - missing or invalid API key.
    - quota exhausted (429).
    - network failures, timeouts.
    """
    pass
