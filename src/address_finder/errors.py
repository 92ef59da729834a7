class AddressFinderError(Exception):
    """Base error for the address finder."""


class InvalidRequestError(AddressFinderError, ValueError):
    """Raised when user input fails validation. The message is user-facing."""


class ConfigurationError(AddressFinderError):
    """Raised when a required setting (e.g. the API key) is missing."""


class DistanceMatrixError(AddressFinderError):
    """Raised when the distance service fails as a whole."""

    def __init__(self, message: str, *, status: str | None = None):
        super().__init__(message)
        self.status = status
