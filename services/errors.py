# services/errors.py
"""
Error taxonomy shared by every service.

Services raise these; main.py turns them into `{"error": message}`
JSON bodies with the matching HTTP status.
"""


class ShortKatError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class Unauthenticated(ShortKatError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ValidationError(ShortKatError):
    status_code = 400


class SelfMessageRejected(ValidationError):
    def __init__(self, message: str = "Cannot message yourself"):
        super().__init__(message)


class Forbidden(ShortKatError):
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFound(ShortKatError):
    status_code = 404


class InternalFailure(ShortKatError):
    status_code = 500
