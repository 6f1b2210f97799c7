"""
Authenticator - holds the Google bearer token for one dashboard session.

Token lifecycle:
================
    ABSENT --(consent granted, code exchanged)--> PRESENT
    PRESENT --(sign_out, or token past expires_at)--> ABSENT

A cancelled or failed sign-in never touches the current state. There is no
refresh: once the token expires every Google call is treated as "not
authenticated" until the user signs in again. Sign-out only forgets the token;
it is not revoked at Google.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional

from dashboard.environments.base import (
    AuthenticationError,
    OAuthTokens,
    UserInfo,
)
from dashboard.environments.google.auth import GoogleAuthClient, DASHBOARD_SCOPES


logger = logging.getLogger("dashboard.services.authenticator")


class TokenState(str, Enum):
    """Whether the session currently holds a usable bearer token."""
    ABSENT = "absent"
    PRESENT = "present"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Authenticator:
    """
    In-memory token holder plus the two halves of the consent flow.

    Example:
        auth = Authenticator()
        url = auth.begin_sign_in(auth_client)     # redirect the browser here
        if auth.expects_state(state):
            ok = await auth.complete_sign_in(auth_client, code)
        if auth.is_authenticated:
            drive = GoogleDriveClient(auth.access_token)
    """

    def __init__(
        self,
        scopes: Optional[List[str]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.scopes = list(scopes) if scopes is not None else list(DASHBOARD_SCOPES)
        self._clock = clock
        self._tokens: Optional[OAuthTokens] = None
        self._pending_state: Optional[str] = None
        self.user: Optional[UserInfo] = None

    # -------------------------------------------------------------------------
    # TOKEN STATE
    # -------------------------------------------------------------------------

    @property
    def state(self) -> TokenState:
        if self._tokens is None:
            return TokenState.ABSENT
        expires_at = self._tokens.expires_at
        if expires_at is not None and self._clock() >= expires_at:
            logger.info("Access token expired; session is signed out")
            self._tokens = None
            self.user = None
            return TokenState.ABSENT
        return TokenState.PRESENT

    @property
    def is_authenticated(self) -> bool:
        return self.state is TokenState.PRESENT

    @property
    def access_token(self) -> Optional[str]:
        """The bearer token, or None when the state is ABSENT."""
        if self.state is TokenState.ABSENT:
            return None
        return self._tokens.access_token

    # -------------------------------------------------------------------------
    # SIGN IN / SIGN OUT
    # -------------------------------------------------------------------------

    def begin_sign_in(self, auth_client: GoogleAuthClient) -> str:
        """
        Start the interactive consent flow.

        Returns:
            The consent URL; the browser must be redirected to it
        """
        state = auth_client.generate_state()
        self._pending_state = state
        return auth_client.get_authorization_url(scopes=self.scopes, state=state)

    def expects_state(self, state: Optional[str]) -> bool:
        """True if `state` belongs to the sign-in this session started."""
        return self._pending_state is not None and state == self._pending_state

    def cancel_sign_in(self) -> None:
        """The user denied or closed the consent screen."""
        self._pending_state = None
        logger.info("Sign-in cancelled; token state unchanged")

    async def complete_sign_in(
        self,
        auth_client: GoogleAuthClient,
        code: str,
    ) -> bool:
        """
        Finish the consent flow with the authorization code from the callback.

        The caller checks the callback's state with expects_state() first;
        this consumes the pending sign-in either way.

        Returns:
            True if a token is now held. On False the previous token (if any)
            is still in place.
        """
        self._pending_state = None

        try:
            tokens = await auth_client.exchange_code_for_tokens(code)
        except AuthenticationError as e:
            logger.error(f"Sign-in failed: {e}")
            return False

        self._tokens = tokens
        self.user = None
        logger.info("Signed in", extra={"scopes": tokens.scopes})

        try:
            self.user = await auth_client.get_user_info(tokens.access_token)
        except AuthenticationError as e:
            logger.warning(f"Signed in but profile lookup failed: {e}")

        return True

    def sign_out(self) -> None:
        """Forget the token. It stays valid at Google until it expires."""
        self._tokens = None
        self.user = None
        self._pending_state = None
        logger.info("Signed out")
