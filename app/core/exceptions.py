"""
Application error types.

Each error carries the HTTP status it maps to; main.py renders them as
{"detail": message}. Database failures are not wrapped here and propagate
as SQLAlchemy exceptions.
"""

from typing import List, Optional, Union


class AppError(Exception):
    """Base class for errors raised by the jobs core."""
    status_code: int = 500

    def __init__(self, message: Union[str, List[str]], status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(AppError):
    """Malformed or missing input. message may be a list of validation errors."""
    status_code = 400


class NotFoundError(AppError):
    """No row matches the requested identity."""
    status_code = 404


class InvalidArgumentError(AppError):
    """Empty or non-updatable update payload."""
    status_code = 400
