"""
Exception classes raised by the service layer.
"""


class ServiceError(Exception):
    """
    Base exception for all service-related errors
    """
    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or "SERVICE_ERROR"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON responses"""
        return {"error": self.code, "message": self.message}


class BadRequestError(ServiceError):
    """
    Raised when caller input is missing or invalid
    """
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, "BAD_REQUEST")
        self.field = field

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class NotFoundError(ServiceError):
    """
    Raised when no record matches the given id
    """
    def __init__(self, message: str, id: int | None = None):
        super().__init__(message, "NOT_FOUND")
        self.id = id
