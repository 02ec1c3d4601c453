"""Errors raised by the issue service.

Database errors are not wrapped here: SQLAlchemy exceptions propagate to the
caller unchanged.
"""

from fastapi import status


class IssueServiceError(Exception):
    """Base exception for issue service errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST


class InvalidInputError(IssueServiceError):
    """Missing, blank or oversized field, or a malformed issue id."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT


class ConflictError(IssueServiceError):
    """Another active issue already holds the requested summary."""

    status_code = status.HTTP_409_CONFLICT


class IssueNotFoundError(IssueServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidStateError(IssueServiceError):
    """The issue exists but has been deleted."""

    status_code = status.HTTP_409_CONFLICT
