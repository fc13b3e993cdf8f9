"""Google OAuth 2.0 adapter.

Implements OAuthProviderPort with the web-server authorization code flow:
consent URL construction, code-for-token exchange and a userinfo lookup
mapped to ProviderProfile.

API Documentation: https://developers.google.com/identity/protocols/oauth2/web-server
"""

import logging
import os
from urllib.parse import urlencode

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from domain.model.errors import ProviderExchangeError
from domain.model.user import ProviderEmail, ProviderProfile

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
SCOPES = ("profile", "email")
API_TIMEOUT_SECONDS = 5.0

GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
GOOGLE_CALLBACK_URL = os.getenv("GOOGLE_CALLBACK_URL", "http://localhost:8000/auth/google/callback")


class GoogleOAuthAdapter:
    def __init__(
        self,
        client_id: str = GOOGLE_CLIENT_ID,
        client_secret: str = GOOGLE_CLIENT_SECRET,
        callback_url: str = GOOGLE_CALLBACK_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.callback_url = callback_url
        self._transport = transport

    def authorization_url(self, state: str | None = None) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "response_type": "code",
            "scope": " ".join(SCOPES),
        }
        if state:
            params["state"] = state
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> ProviderProfile:
        """Trade the authorization code for an access token, then read the profile.

        The code is single-use, so the token request is never retried.
        """
        try:
            async with httpx.AsyncClient(timeout=API_TIMEOUT_SECONDS, transport=self._transport) as client:
                token_response = await client.post(GOOGLE_TOKEN_URL, data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.callback_url,
                    "grant_type": "authorization_code",
                })
                token_response.raise_for_status()
                access_token = _json_object(token_response).get("access_token")
                if not access_token:
                    raise ProviderExchangeError("Token response missing access_token")

                userinfo_response = await _fetch_userinfo(client, access_token)
                userinfo_response.raise_for_status()
                return _to_profile(_json_object(userinfo_response))
        except httpx.HTTPStatusError as e:
            logger.warning("Google OAuth HTTP error", extra={
                "status_code": e.response.status_code,
                "url": str(e.request.url),
            })
            raise ProviderExchangeError("Provider rejected the request") from e
        except httpx.RequestError as e:
            logger.warning("Google OAuth request failed", extra={"error": str(e)[:200]})
            raise ProviderExchangeError("Provider unreachable") from e
        except ValueError as e:
            logger.warning("Google OAuth returned malformed JSON", extra={"error": str(e)[:200]})
            raise ProviderExchangeError("Malformed provider response") from e


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(2),
    wait=wait_exponential(multiplier=0.2, max=1),
    reraise=True,
)
async def _fetch_userinfo(client: httpx.AsyncClient, access_token: str) -> httpx.Response:
    """Fetch the userinfo document, retrying once on transient transport failures."""
    return await client.get(
        GOOGLE_USERINFO_URL,
        headers={"Authorization": f"Bearer {access_token}"},
    )


def _json_object(response: httpx.Response) -> dict:
    """Decode a provider response body that must be a JSON object."""
    data = response.json()
    if not isinstance(data, dict):
        logger.warning("Google OAuth returned a non-object body", extra={"url": str(response.request.url)})
        raise ProviderExchangeError("Malformed provider response")
    return data


def _to_profile(data: dict) -> ProviderProfile:
    """Map an OpenID Connect userinfo document to ProviderProfile."""
    if not data.get("sub"):
        raise ProviderExchangeError("Userinfo response missing subject id")

    emails = []
    if data.get("email"):
        emails.append(ProviderEmail(value=data["email"], verified=bool(data.get("email_verified"))))

    return ProviderProfile(
        id=str(data["sub"]),
        emails=emails,
        given_name=data.get("given_name"),
        family_name=data.get("family_name"),
        display_name=data.get("name"),
        photos=[data["picture"]] if data.get("picture") else [],
    )
