import asyncio
from datetime import datetime
from typing import Any

import httpx
from supabase import AuthApiError, Client, create_client
from supabase import AuthError as SupabaseAuthError

from pagequiz.logging.logger import Log
from pagequiz.session.base import BaseAuthProvider
from pagequiz.session.exceptions import AuthError
from pagequiz.session.models import AuthUser

# Statuses meaning the token is no longer valid, not that the provider failed.
_EXPIRED_STATUSES = (401, 403)


class SupabaseAuthAdapter(BaseAuthProvider):
    """Checks and ends sessions through the supabase-py auth client.

    The client is created on first use, so a misconfigured project only
    fails when auth is actually needed.
    """

    def __init__(
        self,
        *,
        url: str,
        anon_key: str,
        client: Client | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._anon_key = anon_key
        self._client = client

    async def get_user(self, access_token: str) -> AuthUser | None:
        client = self._get_client()
        try:
            response = await asyncio.to_thread(client.auth.get_user, access_token)
        except AuthApiError as exc:
            if exc.status in _EXPIRED_STATUSES:
                Log.info(f"Auth token rejected by provider: HTTP {exc.status}")
                return None
            raise AuthError(f"Auth provider returned HTTP {exc.status}: {exc.message}") from exc
        except (SupabaseAuthError, httpx.HTTPError) as exc:
            raise AuthError(f"Auth provider unreachable: {exc}") from exc

        user = response.user if response is not None else None
        if user is None:
            return None
        return self._to_user(user)

    async def sign_out(self, access_token: str) -> None:
        client = self._get_client()
        try:
            await asyncio.to_thread(client.auth.admin.sign_out, access_token)
        except AuthApiError as exc:
            # An already expired session counts as signed out.
            if exc.status not in (*_EXPIRED_STATUSES, 404):
                raise AuthError(f"Sign-out failed with HTTP {exc.status}: {exc.message}") from exc
        except (SupabaseAuthError, httpx.HTTPError) as exc:
            raise AuthError(f"Auth provider unreachable: {exc}") from exc

    def _get_client(self) -> Client:
        if self._client is None:
            try:
                self._client = create_client(self._url, self._anon_key)
            except Exception as exc:
                raise AuthError(f"Supabase client could not be created: {exc}") from exc
            Log.info("Supabase auth client initialized")
        return self._client

    @staticmethod
    def _to_user(user: Any) -> AuthUser:
        if not getattr(user, "id", None):
            raise AuthError("Auth provider returned an invalid user payload")
        metadata = dict(getattr(user, "user_metadata", None) or {})
        created_at = getattr(user, "created_at", None)
        if isinstance(created_at, datetime):
            created_at = created_at.isoformat()
        return AuthUser(
            id=str(user.id),
            email=getattr(user, "email", None),
            full_name=metadata.get("full_name") or metadata.get("name"),
            avatar_url=metadata.get("avatar_url"),
            created_at=created_at,
            metadata=metadata,
        )
