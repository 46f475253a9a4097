"""Errors raised by request handlers and rendered as ``{"error": ...}``."""

from fastapi import status


class EHRError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(EHRError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class BadRequestError(EHRError):
    """A required parameter is missing or unusable."""

    status_code = status.HTTP_400_BAD_REQUEST
