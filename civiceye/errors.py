"""
Error Types
Failures raised by the service layer and mapped to HTTP responses
"""
from fastapi import status


class CivicEyeError(Exception):
    """Base error carrying the HTTP status it maps to"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_envelope(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(CivicEyeError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(CivicEyeError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(CivicEyeError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(CivicEyeError):
    status_code = status.HTTP_404_NOT_FOUND


class ServerError(CivicEyeError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
