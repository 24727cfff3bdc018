"""
Client for the external user service.

The order workflow only needs to know whether a user exists. Every lookup is
one GET with an explicit timeout - no retries and no caching, so each call
reflects the user service's current answer.
"""

import logging
import threading
from typing import Optional, Protocol

import httpx
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import DependencyUnavailable, UserNotFound
from shared.models import User

logger = logging.getLogger("user_directory")


class UserDirectory(Protocol):
    """Capability the order workflow needs from the user service."""

    def get_user(self, user_id: int) -> User:
        ...


class HttpUserDirectory:
    """
    Looks users up via GET <base_url>/user/{id}.

    Raises:
        UserNotFound: The service answered 404
        DependencyUnavailable: Network error, timeout, or any other status
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client
        self._lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        """HTTP client, created on first use."""
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self.timeout)
            return self._client

    def get_user(self, user_id: int) -> User:
        """
        Fetch a user from the user service.

        Args:
            user_id: Id of the user to resolve

        Returns:
            The resolved User
        """
        url = f"{self.base_url}/user/{user_id}"
        try:
            response = self.client.get(url, timeout=self.timeout)
        except httpx.TimeoutException as e:
            logger.error(f"User service timed out after {self.timeout}s: {url}")
            raise DependencyUnavailable(f"User service timed out looking up user {user_id}") from e
        except httpx.HTTPError as e:
            logger.error(f"Cannot reach user service at {url}: {e}")
            raise DependencyUnavailable(f"Cannot reach user service: {e}") from e

        if response.status_code == 404:
            message, code = _error_details(response)
            logger.info(f"User {user_id} does not exist")
            raise UserNotFound(user_id, message=message, code=code)

        if response.status_code != 200:
            logger.error(f"User service answered {response.status_code} for user {user_id}")
            raise DependencyUnavailable(
                f"User service answered {response.status_code} for user {user_id}"
            )

        try:
            return User.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise DependencyUnavailable(f"Unexpected user service response: {e}") from e

    def exists(self, user_id: int) -> bool:
        """True if the user service knows this user."""
        try:
            self.get_user(user_id)
        except UserNotFound:
            return False
        return True

    def close(self) -> None:
        """Release the HTTP client if this directory created it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None


def _error_details(response: httpx.Response) -> tuple[Optional[str], Optional[str]]:
    """Extract {message, code} from a user service error body, if any."""
    try:
        data = response.json()
    except ValueError:
        return None, None
    if not isinstance(data, dict):
        return None, None
    return data.get("message"), data.get("code")
