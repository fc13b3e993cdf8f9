"""Scripted OAuth provider for testing — no network calls."""

import asyncio
from urllib.parse import urlencode

from domain.model.errors import ProviderExchangeError
from domain.model.user import ProviderProfile


class FakeOAuthProvider:
    """Returns a preset profile per authorization code.

    Unknown codes fail with ProviderExchangeError. ``delay`` simulates a slow
    provider for timeout tests.
    """

    def __init__(self, profiles: dict[str, ProviderProfile] | None = None, delay: float = 0.0):
        self.profiles = profiles or {}
        self.delay = delay
        self.exchanged: list[str] = []

    def authorization_url(self, state: str | None = None) -> str:
        params = {'scope': 'profile email', 'response_type': 'code'}
        if state:
            params['state'] = state
        return f"https://provider.test/auth?{urlencode(params)}"

    async def exchange_code(self, code: str) -> ProviderProfile:
        self.exchanged.append(code)
        if self.delay:
            await asyncio.sleep(self.delay)
        profile = self.profiles.get(code)
        if profile is None:
            raise ProviderExchangeError("Unknown authorization code")
        return profile
