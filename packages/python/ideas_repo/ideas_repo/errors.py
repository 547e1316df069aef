"""Domain-level errors for the ideas repository."""


class IdeaError(Exception):
    """Base class for deterministic, client-facing idea failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdeaError(IdeaError):
    """Raised when required idea fields are missing or blank."""

    status_code = 400


class IdeaNotFoundError(IdeaError):
    """Raised when an idea cannot be located or its id is malformed."""

    status_code = 404


class PermissionDeniedError(IdeaError):
    """Raised when a user lacks permissions to perform an action."""

    status_code = 403
