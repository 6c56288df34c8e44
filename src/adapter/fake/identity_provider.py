"""In-memory implementation of IdentityProvider for testing."""


class FakeIdentityProvider:
    """Returns preconfigured claims per access token; unknown tokens are rejected."""

    def __init__(self, tokens: dict[str, dict] | None = None):
        self.tokens = tokens or {}
        self.calls: list[str] = []

    async def fetch_userinfo(self, access_token: str) -> dict | None:
        self.calls.append(access_token)
        return self.tokens.get(access_token)
