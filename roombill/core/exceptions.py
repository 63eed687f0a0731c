"""Domain and remote API exceptions."""


class InvalidInput(ValueError):
    """Raised when user input cannot be processed, e.g. an impossible allocation."""


class ApiError(Exception):
    """Raised when the remote billing API answers with a non-success status."""

    def __init__(self, status: int, message: str):
        self.status = status
        super().__init__(message)


class ApiUnavailable(Exception):
    """Raised when the remote billing API cannot be reached."""
