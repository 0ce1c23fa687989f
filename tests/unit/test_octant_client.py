"""Tests for the Octant HTTP client."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from afkbot.core.exceptions import ApiResponseError
from afkbot.services.octant import OctantClient


def make_response(status=200, payload=None, text=None, url="https://test"):
    """Build a mocked aiohttp response usable as an async context manager."""
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.url = url
    mock_response.headers = {"Content-Type": "application/json"}
    if text is None:
        mock_response.json = AsyncMock(return_value=payload)
    else:
        mock_response.json = AsyncMock(side_effect=json.JSONDecodeError("bad", text, 0))
        mock_response.text = AsyncMock(return_value=text)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)
    return mock_response


class TestOctantClient:
    """Test Octant client requests."""

    @pytest.fixture
    def mock_http_session(self):
        """Create mock HTTP session."""
        session = AsyncMock()
        session.headers = {}
        return session

    @pytest.fixture
    def client(self, settings, mock_http_session):
        """Create client with the mocked session injected."""
        client = OctantClient(settings)
        client._http_session = mock_http_session
        return client

    @pytest.mark.asyncio
    async def test_login(self, client, mock_http_session):
        mock_http_session.post = MagicMock(return_value=make_response(payload={"token": "t"}))

        data = await client.login("a@b.com", "pw")

        assert data == {"token": "t"}
        args, kwargs = mock_http_session.post.call_args
        assert args[0] == "https://gateway.test/api/auth/login"
        assert kwargs["json"] == {"email": "a@b.com", "password": "pw"}
        assert kwargs["headers"]["Origin"] == "https://gateway.test"
        assert kwargs["headers"]["sec-ch-ua-platform"] == '"Android"'

    @pytest.mark.asyncio
    async def test_login_failure_status(self, client, mock_http_session):
        mock_http_session.post = MagicMock(
            return_value=make_response(status=401, payload={"error": "Invalid credentials"})
        )

        with pytest.raises(ApiResponseError, match="failed with status 401") as exc_info:
            await client.login("a@b.com", "wrong")

        assert exc_info.value.status == 401
        assert exc_info.value.body == {"error": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_auth_callback(self, client, mock_http_session, settings):
        response = make_response(text="<html>ok</html>")
        mock_http_session.get = MagicMock(return_value=response)

        result = await client.auth_callback("t0k3n")

        assert result is None
        response.json.assert_not_awaited()
        response.text.assert_not_awaited()
        args, kwargs = mock_http_session.get.call_args
        assert args[0] == "https://hosting.test/auth/callback"
        assert kwargs["params"] == {"token": "t0k3n"}
        assert kwargs["allow_redirects"] is True
        assert kwargs["max_redirects"] == settings.max_redirects

    @pytest.mark.asyncio
    async def test_auth_callback_server_error(self, client, mock_http_session):
        mock_http_session.get = MagicMock(
            return_value=make_response(status=500, text="Internal Server Error")
        )

        with pytest.raises(ApiResponseError) as exc_info:
            await client.auth_callback("t0k3n")

        assert exc_info.value.body == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_start_afk_sends_token_cookie(self, client, mock_http_session):
        mock_http_session.post = MagicMock(
            return_value=make_response(payload={"sessionId": "abc"})
        )

        data = await client.start_afk("t0k3n")

        assert data == {"sessionId": "abc"}
        args, kwargs = mock_http_session.post.call_args
        assert args[0] == "https://hosting.test/api/afk/start"
        assert kwargs["headers"]["Cookie"] == "octant_token=t0k3n"
        assert kwargs["headers"]["Referer"] == "https://hosting.test/dashboard/afk"

    @pytest.mark.asyncio
    async def test_ping_afk(self, client, mock_http_session):
        mock_http_session.post = MagicMock(return_value=make_response(payload=True))

        data = await client.ping_afk("t0k3n", "abc")

        assert data is True
        args, kwargs = mock_http_session.post.call_args
        assert args[0] == "https://hosting.test/api/afk/ping"
        assert kwargs["json"] == {"sessionId": "abc"}

    @pytest.mark.asyncio
    async def test_non_json_body_returned_as_text(self, client, mock_http_session):
        mock_http_session.post = MagicMock(return_value=make_response(text="weird"))

        assert await client.ping_afk("t0k3n", "abc") == "weird"

    @pytest.mark.asyncio
    async def test_undecodable_body_uses_replacement_characters(self, client, mock_http_session):
        response = make_response(text="caf\ufffd")
        response.json = AsyncMock(
            side_effect=UnicodeDecodeError("utf-8", b"caf\xe9", 3, 4, "unexpected end of data")
        )
        mock_http_session.post = MagicMock(return_value=response)

        assert await client.ping_afk("t0k3n", "abc") == "caf\ufffd"
        response.text.assert_awaited_once_with(errors="replace")

    @pytest.mark.asyncio
    async def test_close(self, client, mock_http_session):
        await client.close()

        mock_http_session.close.assert_awaited_once()
        assert client.closed
        with pytest.raises(RuntimeError, match="not initialized"):
            client._session

    @pytest.mark.asyncio
    async def test_context_manager_creates_and_closes_session(self, settings):
        async with OctantClient(settings) as client:
            assert not client.closed

        assert client.closed
