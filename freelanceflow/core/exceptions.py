"""
Domain exceptions.

Each exception maps to one HTTP status category; the mapping is installed as
FastAPI exception handlers in ``freelanceflow.main``.
"""


class FreelanceFlowError(Exception):
    """Base exception for the application."""
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(FreelanceFlowError):
    """Record is missing or belongs to another owner. Both cases look the same."""
    status_code = 404


class RecordValidationError(FreelanceFlowError):
    """Input is well-formed but violates a data rule (orphan reference, duplicate number)."""
    status_code = 400


class UpstreamError(FreelanceFlowError):
    """The external finance assistant could not produce an answer."""
    status_code = 502
