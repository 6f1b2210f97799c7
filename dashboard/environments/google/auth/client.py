"""
Google OAuth Client - Handles the OAuth 2.0 consent flow with Google APIs.

Key Features:
=============
1. Authorization URL generation with the dashboard scopes
2. Code-to-token exchange
3. User info lookup from the userinfo endpoint

Only short-lived access tokens are requested (access_type=online). There is
no refresh and no revocation: an expired token simply means "signed out".

References:
===========
- OAuth 2.0: https://developers.google.com/identity/protocols/oauth2
- Token endpoint: https://oauth2.googleapis.com/token
- Userinfo: https://www.googleapis.com/oauth2/v3/userinfo
"""

import logging
import secrets
from typing import List, Optional, Type, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from dashboard.core.config import settings
from dashboard.environments.base import (
    EnvironmentProvider,
    OAuthTokens,
    UserInfo,
    AuthenticationError,
)
from dashboard.environments.google.auth.schemas import (
    GoogleTokenResponse,
    GoogleUserInfo,
    PROFILE_SCOPES,
)


logger = logging.getLogger("dashboard.environments.google.auth")


ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse_body(response: httpx.Response, model: Type[ModelT], what: str) -> ModelT:
    """Validate a 200 reply from Google; malformed bodies count as a failed sign-in."""
    try:
        return model.model_validate_json(response.content)
    except ValidationError as e:
        logger.error(f"Malformed Google {what}: {e.error_count()} errors")
        raise AuthenticationError(f"Malformed {what} from Google")


class GoogleAuthClient(EnvironmentProvider):
    """
    Google OAuth 2.0 Client implementation.

    Example Usage:
        client = GoogleAuthClient()

        # Step 1: Generate auth URL
        auth_url = client.get_authorization_url(
            scopes=DASHBOARD_SCOPES,
            state="random-csrf-token"
        )

        # Step 2: Handle callback
        tokens = await client.exchange_code_for_tokens(code="abc123")

        # Step 3: Get user info
        user_info = await client.get_user_info(tokens.access_token)
    """

    provider_name = "google"

    AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Google OAuth client.

        Args:
            client_id: Google OAuth Client ID (defaults to settings)
            client_secret: Google OAuth Client Secret (defaults to settings)
            redirect_uri: OAuth callback URL (defaults to settings)
            transport: Optional httpx transport, used by tests
        """
        self.client_id = client_id or settings.GOOGLE_CLIENT_ID
        self.client_secret = client_secret or settings.GOOGLE_CLIENT_SECRET
        self.redirect_uri = redirect_uri or settings.GOOGLE_REDIRECT_URI
        self._transport = transport

        if not self.client_id or not self.client_secret:
            logger.warning(
                "Google OAuth not configured. Set GOOGLE_CLIENT_ID and "
                "GOOGLE_CLIENT_SECRET in environment variables."
            )

    # -------------------------------------------------------------------------
    # AUTHORIZATION URL
    # -------------------------------------------------------------------------

    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        redirect_uri: Optional[str] = None,
        include_profile: bool = True,
        access_type: str = "online",
        prompt: str = "consent",
    ) -> str:
        """
        Generate the Google OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request
            state: CSRF protection token (kept by the Authenticator)
            redirect_uri: Override default callback URL
            include_profile: Add profile scopes for user info (default: True)
            access_type: "online" means no refresh token is issued
            prompt: "consent" forces the consent screen every time

        Returns:
            Full authorization URL to redirect the user to
        """
        all_scopes = list(scopes)
        if include_profile:
            for scope in PROFILE_SCOPES:
                if scope not in all_scopes:
                    all_scopes.append(scope)

        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(all_scopes),
            "state": state,
            "access_type": access_type,
            "prompt": prompt,
        }

        auth_url = f"{self.AUTHORIZATION_URL}?{urlencode(params)}"

        logger.info(
            f"Generated Google auth URL with {len(all_scopes)} scopes",
            extra={"scopes": all_scopes}
        )

        return auth_url

    # -------------------------------------------------------------------------
    # TOKEN EXCHANGE
    # -------------------------------------------------------------------------

    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for an access token.

        Args:
            code: Authorization code from Google callback
            redirect_uri: Must match the redirect_uri used in authorization

        Returns:
            OAuthTokens with access_token, expiration and granted scopes

        Raises:
            AuthenticationError: If token exchange fails
        """
        token_data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri or self.redirect_uri,
        }

        logger.info("Exchanging authorization code for tokens")

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.post(
                    self.TOKEN_URL,
                    data=token_data,
                    timeout=settings.HTTP_TIMEOUT,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error during token exchange: {e}")
                raise AuthenticationError(f"Network error: {e}")

        if response.status_code != 200:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            if not isinstance(error_data, dict):
                error_data = {}
            error_msg = error_data.get("error_description", response.text)
            logger.error(f"Token exchange failed: {error_msg}")
            raise AuthenticationError(f"Token exchange failed: {error_msg}")

        token_response = _parse_body(response, GoogleTokenResponse, "token response")

        logger.info(
            "Successfully obtained Google tokens",
            extra={
                "expires_in": token_response.expires_in,
                "scopes": token_response.get_scopes_list(),
            }
        )

        return OAuthTokens(
            access_token=token_response.access_token,
            token_type=token_response.token_type,
            expires_at=token_response.get_expires_at(),
            scopes=token_response.get_scopes_list(),
            extra_data={"id_token": token_response.id_token} if token_response.id_token else None,
        )

    # -------------------------------------------------------------------------
    # USER INFO
    # -------------------------------------------------------------------------

    async def get_user_info(self, access_token: str) -> UserInfo:
        """
        Get user information from Google.

        Requires the profile/email scopes to have been granted.

        Raises:
            AuthenticationError: If the profile cannot be fetched
        """
        logger.info("Fetching user info from Google")

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.get(
                    self.USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=settings.HTTP_TIMEOUT,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error fetching user info: {e}")
                raise AuthenticationError(f"Network error: {e}")

        if response.status_code != 200:
            logger.error(f"Failed to fetch user info: {response.text}")
            raise AuthenticationError("Failed to fetch user info")

        google_user = _parse_body(response, GoogleUserInfo, "user info")

        return UserInfo(
            provider_user_id=google_user.sub,
            email=google_user.email,
            name=google_user.name,
            picture_url=google_user.picture,
        )

    # -------------------------------------------------------------------------
    # UTILITY METHODS
    # -------------------------------------------------------------------------

    @staticmethod
    def generate_state() -> str:
        """
        Generate a cryptographically secure state parameter.

        Used for CSRF protection in the OAuth flow.
        """
        return secrets.token_urlsafe(32)
