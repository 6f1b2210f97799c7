"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- FakeUpstream: in-memory Drive appDataFolder, Drive listing, Classroom and
  GitHub, served through httpx.MockTransport (no network)
- Signed-in Authenticator and ConfigStore helpers
- Test client (FastAPI TestClient) wired to the fake upstream
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Generator, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from dashboard.deps import get_google_auth_client, get_session_manager
from dashboard.environments.base import OAuthTokens, UserInfo
from dashboard.environments.google.drive import MULTIPART_BOUNDARY
from dashboard.main import app
from dashboard.services.authenticator import Authenticator
from dashboard.services.config_store import ConfigStore
from dashboard.services.session_manager import SessionManager


CONFIG_FILENAME = "gwrk-dashboard-config.json"
TEST_STATE = "state-abc"
TEST_TOKEN = "ya29.test-token"


# ---------------------------------------------------------------------------
# FAKE UPSTREAM APIS
# ---------------------------------------------------------------------------


def parse_multipart(body: str) -> tuple:
    """Split a multipart/related upload into (metadata_json, payload_json)."""
    parts = body.split(f"--{MULTIPART_BOUNDARY}")
    # ['', metadata part, payload part, '--']
    metadata = parts[1].split("\r\n\r\n", 1)[1].rstrip("\r\n")
    payload = parts[2].split("\r\n\r\n", 1)[1].rstrip("\r\n")
    return metadata, payload


class FakeUpstream:
    """
    Stand-in for the Google and GitHub REST APIs.

    Attributes:
        app_data: appDataFolder files, in the order listing returns them
        requests: Every request received, in order
        fail: Operation names that should answer with HTTP 500
            ("list", "download", "create", "update", "recent",
             "courses", "coursework", "github")
    """

    def __init__(self):
        self.app_data: List[dict] = []
        self.requests: List[httpx.Request] = []
        self.fail: set = set()
        self.recent_files: List[dict] = []
        self.courses: List[dict] = []
        self.course_work: dict = {}
        self.repos: List[dict] = []
        # Raw body for appDataFolder listings, replacing the computed one
        self.listing_body: Optional[object] = None
        self._next_id = 1

    # -- helpers for tests ---------------------------------------------------

    def seed_file(self, content: str, name: str = CONFIG_FILENAME) -> str:
        file_id = f"file-{self._next_id}"
        self._next_id += 1
        self.app_data.append({"id": file_id, "name": name, "content": content})
        return file_id

    def calls(self, method: Optional[str] = None) -> List[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    # -- request handling ----------------------------------------------------

    def _error(self, op: str) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": f"{op} failed"}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        path = request.url.path
        params = request.url.params

        if host == "www.googleapis.com":
            return self._drive(request, path, params)
        if host == "classroom.googleapis.com":
            return self._classroom(path)
        if host == "api.github.com" and path == "/user/repos":
            if "github" in self.fail:
                return self._error("github")
            return httpx.Response(200, json=self.repos)
        return httpx.Response(404, json={"error": "not found"})

    def _drive(self, request: httpx.Request, path: str, params) -> httpx.Response:
        method = request.method

        if path == "/drive/v3/files" and method == "GET":
            if params.get("spaces") == "appDataFolder":
                if "list" in self.fail:
                    return self._error("list")
                if self.listing_body is not None:
                    return httpx.Response(200, json=self.listing_body)
                name = re.match(r"name='(.*)' and trashed=false", params["q"]).group(1)
                files = [{"id": f["id"], "name": f["name"]} for f in self.app_data if f["name"] == name]
                return httpx.Response(200, json={"files": files})
            if "recent" in self.fail:
                return self._error("recent")
            return httpx.Response(200, json={"files": self.recent_files})

        if path.startswith("/drive/v3/files/") and method == "GET":
            if "download" in self.fail:
                return self._error("download")
            file_id = path.rsplit("/", 1)[1]
            for f in self.app_data:
                if f["id"] == file_id:
                    return httpx.Response(200, content=f["content"].encode("utf-8"))
            return httpx.Response(404, json={"error": "not found"})

        if path == "/upload/drive/v3/files" and method == "POST":
            if "create" in self.fail:
                return self._error("create")
            metadata, payload = parse_multipart(request.content.decode("utf-8"))
            name = re.search(r'"name": "([^"]+)"', metadata).group(1)
            file_id = self.seed_file(payload, name=name)
            return httpx.Response(200, json={"id": file_id})

        if path.startswith("/upload/drive/v3/files/") and method == "PATCH":
            if "update" in self.fail:
                return self._error("update")
            file_id = path.rsplit("/", 1)[1]
            _, payload = parse_multipart(request.content.decode("utf-8"))
            for f in self.app_data:
                if f["id"] == file_id:
                    f["content"] = payload
                    return httpx.Response(200, json={"id": file_id})
            return httpx.Response(404, json={"error": "not found"})

        return httpx.Response(404, json={"error": "not found"})

    def _classroom(self, path: str) -> httpx.Response:
        if path == "/v1/courses":
            if "courses" in self.fail:
                return self._error("courses")
            return httpx.Response(200, json={"courses": self.courses})
        match = re.match(r"/v1/courses/([^/]+)/courseWork", path)
        if match:
            if "coursework" in self.fail:
                return self._error("coursework")
            return httpx.Response(200, json={"courseWork": self.course_work.get(match.group(1), [])})
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


# ---------------------------------------------------------------------------
# AUTH FIXTURES
# ---------------------------------------------------------------------------


def make_tokens(expires_in: int = 3600) -> OAuthTokens:
    return OAuthTokens(
        access_token=TEST_TOKEN,
        expires_at=datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        scopes=["https://www.googleapis.com/auth/drive.appdata"],
    )


@pytest.fixture
def mock_auth_client() -> MagicMock:
    """GoogleAuthClient stand-in: fixed state, successful code exchange."""
    client = MagicMock()
    client.client_id = "test-client-id"
    client.generate_state.return_value = TEST_STATE
    client.get_authorization_url.return_value = (
        f"https://accounts.google.com/o/oauth2/v2/auth?state={TEST_STATE}"
    )
    client.exchange_code_for_tokens = AsyncMock(return_value=make_tokens())
    client.get_user_info = AsyncMock(
        return_value=UserInfo(provider_user_id="123", email="student@example.com", name="Test Student")
    )
    return client


@pytest_asyncio.fixture
async def signed_in_authenticator(mock_auth_client) -> Authenticator:
    authenticator = Authenticator()
    authenticator.begin_sign_in(mock_auth_client)
    assert await authenticator.complete_sign_in(mock_auth_client, "code-1")
    return authenticator


@pytest.fixture
def store(signed_in_authenticator, upstream) -> ConfigStore:
    return ConfigStore(signed_in_authenticator, filename=CONFIG_FILENAME, transport=upstream.transport)


# ---------------------------------------------------------------------------
# APP FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def client(upstream, mock_auth_client) -> Generator[TestClient, None, None]:
    """
    Test client whose sessions talk to the fake upstream.

    Overrides the session manager and the Google auth client dependencies.
    """
    manager = SessionManager(transport=upstream.transport)
    app.dependency_overrides[get_session_manager] = lambda: manager
    app.dependency_overrides[get_google_auth_client] = lambda: mock_auth_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def signed_in_client(client: TestClient) -> TestClient:
    """Test client that has completed the Google sign-in flow."""
    client.get("/auth/google/login", follow_redirects=False)
    response = client.get(
        "/auth/google/callback",
        params={"code": "code-1", "state": TEST_STATE},
        follow_redirects=False,
    )
    assert response.status_code == 302
    return client
