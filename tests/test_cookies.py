"""Tests for cookie commands."""

import base64
import pytest

from seltzer.models import parse_command


COOKIES = {
    "session": {"name": "session", "value": "abc"},
    "theme": {"name": "theme", "value": "dark"},
    "empty": {"name": "empty", "value": ""},
}


@pytest.fixture
def cookie_driver(mock_webdriver):
    mock_webdriver.get_cookie.side_effect = COOKIES.get
    return mock_webdriver


class TestGetCookie:
    """Tests for reading a single cookie."""

    @pytest.mark.asyncio
    async def test_present(self, dispatcher, mock_session, cookie_driver):
        response = await dispatcher.execute(
            parse_command({"type": "GET_COOKIE", "id": mock_session.session_id, "cookie_name": "session"})
        )

        assert response.success is True
        assert response.result == "abc"

    @pytest.mark.asyncio
    async def test_missing(self, dispatcher, mock_session, cookie_driver):
        response = await dispatcher.execute(
            parse_command({"type": "GET_COOKIE", "id": mock_session.session_id, "cookie_name": "nope"})
        )

        assert response.success is False
        assert response.result is None
        assert response.error.code == "COOKIE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_empty_value_is_missing(self, dispatcher, mock_session, cookie_driver):
        response = await dispatcher.execute(
            parse_command({"type": "GET_COOKIE", "id": mock_session.session_id, "cookie_name": "empty"})
        )

        assert response.success is False


class TestGetCookies:
    """Tests for reading several cookies at once."""

    @pytest.mark.asyncio
    async def test_collects_present_values(self, dispatcher, mock_session, cookie_driver):
        """Missing and empty cookies are skipped, the rest kept in order."""
        response = await dispatcher.execute(
            parse_command(
                {
                    "type": "GET_COOKIES",
                    "id": mock_session.session_id,
                    "cookie_names": ["session", "nope", "empty", "theme"],
                }
            )
        )

        assert response.success is True
        assert response.results == ["abc", "dark"]

    @pytest.mark.asyncio
    async def test_none_present(self, dispatcher, mock_session, cookie_driver):
        response = await dispatcher.execute(
            parse_command(
                {"type": "GET_COOKIES", "id": mock_session.session_id, "cookie_names": ["nope", "empty"]}
            )
        )

        assert response.success is False
        assert response.results == []


class TestGetCookieFile:
    """Tests for exporting the profile's cookie database."""

    @pytest.mark.asyncio
    async def test_reads_network_cookie_file(self, dispatcher, mock_session):
        cookie_file = mock_session.working_dir / "Default" / "Network" / "Cookies"
        cookie_file.parent.mkdir(parents=True)
        cookie_file.write_bytes(b"SQLite format 3\x00")

        response = await dispatcher.execute(
            parse_command({"type": "GET_COOKIE_FILE", "id": mock_session.session_id})
        )

        assert response.success is True
        assert base64.b64decode(response.result) == b"SQLite format 3\x00"

    @pytest.mark.asyncio
    async def test_reads_legacy_cookie_file(self, dispatcher, mock_session):
        cookie_file = mock_session.working_dir / "Default" / "Cookies"
        cookie_file.parent.mkdir(parents=True)
        cookie_file.write_bytes(b"legacy")

        response = await dispatcher.execute(
            parse_command({"type": "GET_COOKIE_FILE", "id": mock_session.session_id})
        )

        assert base64.b64decode(response.result) == b"legacy"

    @pytest.mark.asyncio
    async def test_no_cookie_file(self, dispatcher, mock_session):
        response = await dispatcher.execute(
            parse_command({"type": "GET_COOKIE_FILE", "id": mock_session.session_id})
        )

        assert response.success is False
        assert response.error.code == "COOKIE_NOT_FOUND"
