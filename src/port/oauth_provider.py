"""Port definition for the OAuth identity provider."""

from typing import Protocol

from domain.model.user import ProviderProfile


class OAuthProviderPort(Protocol):
    def authorization_url(self, state: str | None = None) -> str:
        """Consent screen URL requesting the ``profile`` and ``email`` scopes."""
        ...

    async def exchange_code(self, code: str) -> ProviderProfile:
        """Exchange an authorization code for the user's profile.

        Raises ProviderExchangeError on any failure.
        """
        ...
