from typing import Optional
from fastapi import HTTPException
from .errors import ErrorDetail, ErrorCode

class APIError(HTTPException):
    """
    Terminal failure of a pipeline stage.

    Only ``error.code`` and ``error.message`` ever reach the caller; ``reason``
    is for the server log.
    """
    def __init__(self, error: ErrorDetail, reason: Optional[str] = None):
        self.error = error
        self.error_code = error.code
        self.reason = reason
        super().__init__(status_code=error.status_code, detail=error.message)


class BackendError(Exception):
    """Raised by inference backends when a model call does not produce a result."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


__all__ = ["APIError", "BackendError", "ErrorCode", "ErrorDetail"]
