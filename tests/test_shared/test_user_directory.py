"""
Tests for the user service client.

The user service is mocked with respx; every test runs inside the
mock_services router, so unmatched requests fail.
"""

import httpx
import pytest

from shared.exceptions import DependencyUnavailable, UserNotFound
from shared.user_directory import HttpUserDirectory


@pytest.fixture
def directory(mock_services):
    directory = HttpUserDirectory("http://localhost/", timeout=1.0)
    yield directory
    directory.close()


class TestGetUser:
    """Tests for resolving users."""

    def test_existing_user(self, directory, mock_services):
        user = directory.get_user(1)

        assert user.id == 1
        assert user.name == "John"
        assert mock_services.routes["john"].call_count == 1

    def test_missing_user_raises_not_found(self, directory, mock_services):
        mock_services.get("http://localhost/user/7").respond(
            404, json={"message": "User does not exist", "code": "nonExisting"}
        )

        with pytest.raises(UserNotFound) as exc_info:
            directory.get_user(7)

        assert exc_info.value.user_id == 7
        assert exc_info.value.code == "nonExisting"
        assert "does not exist" in str(exc_info.value)

    def test_missing_user_without_body(self, directory, mock_services):
        mock_services.get("http://localhost/user/8").respond(404, text="Not Found")

        with pytest.raises(UserNotFound) as exc_info:
            directory.get_user(8)

        assert exc_info.value.code is None

    @pytest.mark.parametrize("status", [500, 502, 503, 401])
    def test_error_status_is_unavailable(self, directory, mock_services, status):
        mock_services.get("http://localhost/user/9").respond(status)

        with pytest.raises(DependencyUnavailable):
            directory.get_user(9)

    @pytest.mark.parametrize("error", [
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
        httpx.ConnectTimeout("timed out"),
    ])
    def test_transport_error_is_unavailable(self, directory, mock_services, error):
        mock_services.get("http://localhost/user/9").mock(side_effect=error)

        with pytest.raises(DependencyUnavailable):
            directory.get_user(9)

    def test_garbage_body_is_unavailable(self, directory, mock_services):
        mock_services.get("http://localhost/user/9").respond(200, text="<html>")

        with pytest.raises(DependencyUnavailable):
            directory.get_user(9)

    def test_no_caching(self, directory, mock_services):
        """Test that every call reaches the user service."""
        directory.get_user(1)
        directory.get_user(1)

        assert mock_services.routes["john"].call_count == 2


class TestExists:
    def test_exists(self, directory, mock_services):
        mock_services.get("http://localhost/user/7").respond(404)

        assert directory.exists(1) is True
        assert directory.exists(7) is False

    def test_exists_propagates_transport_errors(self, directory, mock_services):
        mock_services.get("http://localhost/user/9").respond(503)

        with pytest.raises(DependencyUnavailable):
            directory.exists(9)


def test_shared_client_is_not_closed(mock_services):
    """Test that an injected client belongs to the caller."""
    client = httpx.Client()
    directory = HttpUserDirectory("http://localhost", client=client)

    directory.close()

    assert not client.is_closed
    client.close()


def test_client_created_on_first_lookup(mock_services):
    """Test that building a directory opens no connections."""
    directory = HttpUserDirectory("http://localhost")
    assert directory._client is None

    directory.get_user(1)

    assert directory._client is not None
    directory.close()
    assert directory._client is None
