"""Service layer errors."""

from fastapi import status


class ServiceError(Exception):
    """Raised by services; routes translate it into an HTTP error."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
