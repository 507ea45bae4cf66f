class AuthError(Exception):
    """Raised when the auth provider cannot be reached or rejects a call."""
