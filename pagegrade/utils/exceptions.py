"""
pagegrade/utils/exceptions.py
Error taxonomy. Checks never raise; only input validation and page
retrieval can fail, and both fail before any scoring starts.
"""


class PageGradeError(Exception):
    """Base class for every error surfaced to callers."""

    def __init__(self, message: str, step: str = "", details: str = ""):
        self.message = message
        self.step = step
        self.details = details
        super().__init__(message)


class InputValidationError(PageGradeError):
    """Empty, too-short or unusable input. The message is user-facing."""

    def __init__(self, message: str, field: str = ""):
        self.field = field
        super().__init__(
            message,
            step="VALIDATION",
            details=f"Field: {field}" if field else "",
        )


class RetrievalError(PageGradeError):
    """Every retrieval source failed for a URL."""

    def __init__(self, message: str, url: str = "", attempts: int = 0):
        self.url = url
        self.attempts = attempts
        super().__init__(
            message,
            step="RETRIEVAL",
            details=f"URL: {url}, Attempts: {attempts}" if url else "",
        )
