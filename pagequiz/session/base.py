from abc import ABC, abstractmethod

from pagequiz.session.models import AuthUser


class BaseAuthProvider(ABC):
    """Contract for external auth providers."""

    @abstractmethod
    async def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user owning the token, or None if the session is invalid.

        Raises:
            AuthError: if the provider cannot be reached.
        """

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Invalidate the session on the provider side.

        Raises:
            AuthError: on failure.
        """
