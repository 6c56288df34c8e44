"""Identity provider port: outbound check of provider access tokens."""

from typing import Protocol


class IdentityProvider(Protocol):
    async def fetch_userinfo(self, access_token: str) -> dict | None:
        """Return the provider's profile claims for the token, or None if rejected."""
        ...
