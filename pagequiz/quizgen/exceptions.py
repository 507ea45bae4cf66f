class CompletionError(Exception):
    """Raised when quiz generation by the upstream model fails."""


class CompletionConfigError(CompletionError):
    """Raised when the upstream provider is not configured (e.g. missing API key)."""


class CompletionNetworkError(CompletionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
