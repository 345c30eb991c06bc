"""Base class for clients of the catalog server's REST API."""

import logging
from typing import Any, Dict

import httpx

from ..application.exceptions import ConfigurationError

from .decorators import retry_on_connect_error

_USER_SCOPE = "/servers/{server_name}/users/{user_id}"


class CatalogServerClient:
    """
    Common plumbing for calls made on behalf of one user of one catalog
    server: the user-scoped URL prefix, bearer authentication and the
    connect-retried JSON POST.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        base_url: str,
        server_name: str,
        user_id: str,
        timeout: int,
    ):
        """
        Initializes the client.

        Args:
            client: A shared httpx.AsyncClient.
            token: Bearer token for the catalog server.
            base_url: Root URL of the catalog server platform.
            server_name: Name of the catalog server on that platform.
            user_id: User the calls are made for.
            timeout: Per-request timeout in seconds.

        Raises:
            ConfigurationError: If the token is missing or still the
                                placeholder from the sample secrets file,
                                or the server name or user id is blank.
        """

        if not token or "YOUR_" in token.upper():
            raise ConfigurationError(
                f"Catalog token for {self.__class__.__name__} is missing "
                f"or is a placeholder. Please check config/.secrets.toml."
            )
        if not server_name or not user_id:
            raise ConfigurationError(
                "catalog.server_name and catalog.user_id must both be set."
            )

        self.client = client
        self.token = token
        self.timeout = timeout
        self.base_url = base_url.rstrip("/") + _USER_SCOPE.format(
            server_name=server_name, user_id=user_id
        )
        self.logger = logging.getLogger(self.__class__.__name__)

    def url_for(self, path: str) -> str:
        """Absolute URL of a user-scoped resource, e.g. '/assets/csv-files'."""
        return self.base_url + path

    @property
    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    @retry_on_connect_error
    async def post_json(self, url: str, body: Dict[str, Any]) -> httpx.Response:
        """Executes the raw HTTP POST request."""
        return await self.client.post(
            url,
            json=body,
            headers=self.auth_headers,
            timeout=self.timeout,
        )
