"""
Environments Module - External Service Integrations

Architecture Overview:
======================
environments/
├── __init__.py           # Module exports
├── base.py               # Exceptions, token types, shared request helper
├── google/               # Google OAuth, Drive, Classroom
└── github/               # GitHub repositories

Each service module can be tested on its own by handing its client an
httpx.MockTransport.
"""

from dashboard.environments.base import (
    EnvironmentProvider,
    EnvironmentService,
    EnvironmentError,
    AuthenticationError,
    APIError,
    OAuthTokens,
    UserInfo,
)

__all__ = [
    "EnvironmentProvider",
    "EnvironmentService",
    "EnvironmentError",
    "AuthenticationError",
    "APIError",
    "OAuthTokens",
    "UserInfo",
]
