"""Service-layer errors; routes translate them into HTTP responses."""


class ServiceError(Exception):
    """Base class for expected, client-facing service failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Missing or malformed input."""

    status_code = 400


class ConflictError(ServiceError):
    """A unique key (e.g. username) is already taken."""

    status_code = 400

