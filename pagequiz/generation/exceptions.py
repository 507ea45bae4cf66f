class GenerationError(Exception):
    """Raised when the remote test generation call fails."""


class GenerationNetworkError(GenerationError):
    """Raised when the generation endpoint cannot be reached."""
