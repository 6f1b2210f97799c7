"""
Base classes and interfaces for Environment integrations.

This module defines the contracts shared by every upstream integration
(Google OAuth, Drive, Classroom, GitHub).

Design Pattern: Template Method
===============================
- EnvironmentProvider: Abstract base for OAuth providers
- EnvironmentService: Base for API services; owns the authenticated
  request helper so every client reports failures the same way
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List, Dict, Any

import httpx

from dashboard.core.config import settings


logger = logging.getLogger("dashboard.environments")


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------


class EnvironmentError(Exception):
    """Base exception for all environment-related errors."""
    pass


class AuthenticationError(EnvironmentError):
    """Raised when authentication with a provider fails."""
    pass


class APIError(EnvironmentError):
    """Raised when an API call to the provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


# ---------------------------------------------------------------------------
# DATA STRUCTURES
# ---------------------------------------------------------------------------


@dataclass
class OAuthTokens:
    """
    Standardized token data from an OAuth provider.

    Only lives in memory; nothing in this application persists it.
    """
    access_token: str
    token_type: str = "Bearer"
    expires_at: Optional[datetime] = None
    scopes: Optional[List[str]] = None
    extra_data: Optional[Dict[str, Any]] = None


@dataclass
class UserInfo:
    """Basic user information from an OAuth provider."""
    provider_user_id: str  # Unique ID from the provider (e.g., Google's 'sub')
    email: Optional[str] = None
    name: Optional[str] = None
    picture_url: Optional[str] = None


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASSES
# ---------------------------------------------------------------------------


class EnvironmentProvider(ABC):
    """
    Abstract base class for OAuth providers.

    The provider is responsible for:
    - Generating authorization URLs
    - Exchanging authorization codes for tokens
    - Extracting user information from tokens

    Refresh and revocation are intentionally absent: tokens live for one
    session and are simply dropped on sign-out.
    """

    provider_name: str = ""

    @abstractmethod
    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        redirect_uri: Optional[str] = None,
    ) -> str:
        """
        Generate the OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request
            state: CSRF protection state parameter
            redirect_uri: Override the default redirect URI

        Returns:
            URL to redirect the user to for authorization
        """
        pass

    @abstractmethod
    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for an access token.

        Raises:
            AuthenticationError: If code exchange fails
        """
        pass

    @abstractmethod
    async def get_user_info(self, access_token: str) -> UserInfo:
        """Get user information from the provider."""
        pass


class EnvironmentService:
    """
    Base class for API services (Drive, Classroom, GitHub).

    Subclasses set BASE_URL and, where needed, override _get_headers().
    All requests go through _send(), which maps transport failures and
    non-2xx statuses onto APIError.

    Attributes:
        access_token: Bearer credential presented on every request
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    service_name: str = ""
    required_scopes: List[str] = []

    BASE_URL: str = ""

    def __init__(
        self,
        access_token: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.access_token = access_token
        self._transport = transport
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT

    # -------------------------------------------------------------------------
    # HTTP CLIENT MANAGEMENT
    # -------------------------------------------------------------------------

    def _get_headers(self) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        content: Optional[str] = None,
        headers: Optional[dict] = None,
    ) -> httpx.Response:
        """
        Make an authenticated request and return the raw response.

        Args:
            method: HTTP method (GET, POST, PATCH, ...)
            url: Absolute URL, or a path relative to BASE_URL
            params: Query parameters
            content: Raw request body
            headers: Extra headers merged over the auth headers

        Raises:
            APIError: On network failure or a non-success status
        """
        if not url.startswith("http"):
            url = f"{self.BASE_URL}{url}"

        request_headers = self._get_headers()
        if headers:
            request_headers.update(headers)

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=request_headers,
                    params=params,
                    content=content,
                    timeout=self._timeout,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in {self.service_name} API: {e}")
                raise APIError(f"Network error: {e}")

        if response.status_code == 401:
            logger.error(f"{self.service_name} API: Unauthorized (token may be expired)")
            raise APIError(
                "Unauthorized - access token may be expired",
                status_code=401,
                response=response.text,
            )

        if response.status_code == 403:
            logger.error(f"{self.service_name} API: Forbidden (scope may be missing)")
            raise APIError(
                f"Forbidden - {self.service_name} scope may not be granted",
                status_code=403,
                response=response.text,
            )

        if not response.is_success:
            error_detail = response.text
            logger.error(f"{self.service_name} API error: {response.status_code} - {error_detail}")
            raise APIError(
                f"API request failed: {error_detail}",
                status_code=response.status_code,
                response=error_detail,
            )

        return response

    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        content: Optional[str] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        """Like _send(), but returns the parsed JSON body."""
        response = await self._send(method, url, params=params, content=content, headers=headers)
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON from {self.service_name} API: {e}",
                status_code=response.status_code,
                response=response.text,
            )
