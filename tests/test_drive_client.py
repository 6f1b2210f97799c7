"""
Tests for GoogleDriveClient.

These tests verify the wire contract against the Drive REST API:
- appDataFolder listing query
- multipart/related create and update bodies
- raw download
- error mapping onto APIError
"""

import json

import httpx
import pytest

from dashboard.environments.base import APIError
from dashboard.environments.google.drive import (
    GoogleDriveClient,
    MULTIPART_BOUNDARY,
    build_multipart_body,
)
from conftest import CONFIG_FILENAME, parse_multipart


class TestMultipartBody:
    """Tests for build_multipart_body."""

    def test_parts_in_order_with_crlf(self):
        body = build_multipart_body({"name": "a.json", "parents": ["appDataFolder"]}, '{"k": 1}')

        assert body == "\r\n".join([
            f"--{MULTIPART_BOUNDARY}",
            "Content-Type: application/json; charset=UTF-8",
            "",
            '{"name": "a.json", "parents": ["appDataFolder"]}',
            f"--{MULTIPART_BOUNDARY}",
            "Content-Type: application/json",
            "",
            '{"k": 1}',
            f"--{MULTIPART_BOUNDARY}--",
        ])

    def test_boundary_is_constant(self):
        assert MULTIPART_BOUNDARY == "-------314159265358979323846"


class TestAppDataListing:
    """Tests for find_app_data_files."""

    @pytest.mark.asyncio
    async def test_query_parameters(self, upstream):
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        await drive.find_app_data_files(CONFIG_FILENAME)

        request = upstream.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/drive/v3/files"
        assert request.url.params["q"] == f"name='{CONFIG_FILENAME}' and trashed=false"
        assert request.url.params["spaces"] == "appDataFolder"
        assert request.url.params["fields"] == "files(id,name)"
        assert request.headers["Authorization"] == "Bearer ya29.x"

    @pytest.mark.asyncio
    async def test_returns_handles_in_listing_order(self, upstream):
        first = upstream.seed_file("{}")
        second = upstream.seed_file("{}")
        upstream.seed_file("{}", name="other.json")
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        handles = await drive.find_app_data_files(CONFIG_FILENAME)

        assert [h.id for h in handles] == [first, second]

    @pytest.mark.asyncio
    async def test_quotes_in_name_are_escaped(self, upstream):
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        await drive.find_app_data_files("it's.json")

        assert upstream.requests[0].url.params["q"] == "name='it\\'s.json' and trashed=false"

    @pytest.mark.asyncio
    async def test_error_status_raises(self, upstream):
        upstream.fail.add("list")
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        with pytest.raises(APIError) as exc_info:
            await drive.find_app_data_files(CONFIG_FILENAME)

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_entry_without_name_raises_api_error(self, upstream):
        upstream.listing_body = {"files": [{"id": "a"}]}
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        with pytest.raises(APIError, match="file listing"):
            await drive.find_app_data_files(CONFIG_FILENAME)

    @pytest.mark.asyncio
    async def test_unauthorized_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(401, json={}))
        drive = GoogleDriveClient("expired", transport=transport)

        with pytest.raises(APIError) as exc_info:
            await drive.find_app_data_files(CONFIG_FILENAME)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        drive = GoogleDriveClient("ya29.x", transport=httpx.MockTransport(handler))

        with pytest.raises(APIError):
            await drive.find_app_data_files(CONFIG_FILENAME)


class TestAppDataUpload:
    """Tests for create/update of the appDataFolder file."""

    @pytest.mark.asyncio
    async def test_create_posts_multipart(self, upstream):
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        file_id = await drive.create_app_data_file(CONFIG_FILENAME, '{"layout": []}')

        request = upstream.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/upload/drive/v3/files"
        assert request.url.params["uploadType"] == "multipart"
        assert request.url.params["fields"] == "id"
        assert request.headers["Content-Type"] == f"multipart/related; boundary={MULTIPART_BOUNDARY}"

        metadata, payload = parse_multipart(request.content.decode("utf-8"))
        assert json.loads(metadata) == {"name": CONFIG_FILENAME, "parents": ["appDataFolder"]}
        assert payload == '{"layout": []}'
        assert file_id == upstream.app_data[0]["id"]

    @pytest.mark.asyncio
    async def test_update_patches_same_file(self, upstream):
        file_id = upstream.seed_file('{"old": true}')
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        result = await drive.update_app_data_file(file_id, CONFIG_FILENAME, '{"new": true}')

        request = upstream.requests[0]
        assert request.method == "PATCH"
        assert request.url.path == f"/upload/drive/v3/files/{file_id}"
        metadata, _ = parse_multipart(request.content.decode("utf-8"))
        assert json.loads(metadata)["parents"] == ["appDataFolder"]
        assert result == file_id
        assert upstream.app_data[0]["content"] == '{"new": true}'

    @pytest.mark.asyncio
    async def test_download_returns_raw_bytes(self, upstream):
        file_id = upstream.seed_file('{"layout": []}')
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        raw = await drive.download_file(file_id)

        assert raw == b'{"layout": []}'
        assert upstream.requests[0].url.params["alt"] == "media"


class TestRecentFiles:
    """Tests for list_recent_files."""

    @pytest.mark.asyncio
    async def test_lists_recent_files(self, upstream):
        upstream.recent_files = [
            {
                "id": "f1",
                "name": "Essay.docx",
                "webViewLink": "https://drive.google.com/file/d/f1/view",
                "mimeType": "application/vnd.google-apps.document",
                "modifiedTime": "2026-10-18T09:30:00.000Z",
            }
        ]
        drive = GoogleDriveClient("ya29.x", transport=upstream.transport)

        files = await drive.list_recent_files()

        request = upstream.requests[0]
        assert request.url.params["orderBy"] == "modifiedTime desc"
        assert request.url.params["pageSize"] == "10"
        assert files[0].name == "Essay.docx"
        assert files[0].web_view_link.endswith("/f1/view")
