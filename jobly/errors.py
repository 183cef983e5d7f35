"""
Error types for Jobly.

Every error carries the HTTP status the API layer answers with.
"""


class JoblyError(Exception):
    """Base class for errors surfaced to API clients."""

    status = 500

    def __init__(self, message="Internal Server Error", status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class BadRequestError(JoblyError):
    """Invalid input: empty update payload, inverted range, bad reference."""

    status = 400

    def __init__(self, message="Bad Request"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    status = 401

    def __init__(self, message="Unauthorized"):
        super().__init__(message)


class NotFoundError(JoblyError):
    status = 404

    def __init__(self, message="Not Found"):
        super().__init__(message)
