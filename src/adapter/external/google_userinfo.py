"""Google userinfo adapter.

Implements IdentityProvider by asking Google which account an OAuth
access token belongs to.

API Documentation: https://developers.google.com/identity/openid-connect/openid-connect#obtainuserinfo
"""

import logging

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

logger = logging.getLogger(__name__)

GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
API_TIMEOUT_SECONDS = 5.0


class GoogleUserInfoAdapter:
    """Adapter that resolves access tokens through Google's userinfo endpoint."""

    def __init__(
        self,
        url: str = GOOGLE_USERINFO_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._transport = transport

    async def fetch_userinfo(self, access_token: str) -> dict | None:
        """Fetch profile claims for an access token.

        Returns:
            Claims dict (sub, email, name, ...), or None if Google rejects
            the token or cannot be reached.
        """
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            async with httpx.AsyncClient(
                timeout=API_TIMEOUT_SECONDS, transport=self._transport,
            ) as client:
                response = await _fetch_with_retry(client, self.url, headers)

                if response.status_code in (401, 403):
                    logger.info(
                        "Google rejected access token",
                        extra={"status_code": response.status_code},
                    )
                    return None

                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Google userinfo HTTP error",
                extra={"status_code": e.response.status_code},
            )
            return None
        except httpx.RequestError as e:
            logger.warning(
                "Google userinfo request error",
                extra={"error_type": type(e).__name__},
            )
            return None
        except ValueError as e:
            logger.warning("Google userinfo returned invalid JSON", extra={"error": str(e)[:200]})
            return None

        if not isinstance(data, dict) or not data.get("sub"):
            logger.warning(
                "Unexpected response from Google userinfo",
                extra={"type": type(data).__name__},
            )
            return None

        return data


# ── HTTP helpers ─────────────────────────────────────────────


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _fetch_with_retry(
    client: httpx.AsyncClient, url: str, headers: dict[str, str],
) -> httpx.Response:
    """Fetch URL with automatic retry on transient failures."""
    return await client.get(url, headers=headers)
