"""
Service Errors
Failures the HTTP layer translates into status codes
"""
from typing import Dict, List, Optional


class ServiceError(Exception):
    """Base class for failures raised by the service layer"""
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(ServiceError):
    """Missing, invalid or non-unique fields"""
    status_code = 400
    default_message = "Validation error"

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors

    @classmethod
    def field(cls, name: str, message: str) -> "ValidationError":
        return cls({name: [message]})

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class NotFound(ServiceError):
    """Episode or part absent, or the part belongs to another episode"""
    status_code = 404
    default_message = "Not found."


class TransactionFailure(ServiceError):
    """A multi-step write failed and was rolled back"""
    status_code = 500
    default_message = "Error occurred, something went wrong"


class InternalError(ServiceError):
    """Unexpected failure on a read path"""
    status_code = 500
    default_message = "An error occurred while processing the request."
