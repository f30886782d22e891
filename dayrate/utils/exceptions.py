"""Domain exceptions raised by services and mapped to HTTP errors in main."""


class DayrateError(RuntimeError):
    """Base exception for expected, user-facing failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DayrateError):
    """Malformed or out-of-range input, or a violated business rule."""


class ConflictError(DayrateError):
    """A uniqueness constraint kept losing after the allowed retries."""


class NotFoundError(DayrateError):
    """A referenced user or record does not exist."""
