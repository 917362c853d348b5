"""HTTP transport for the Wren server: REST helpers plus a GraphQL caller."""

import logging
from typing import Any

import httpx

from wren_cli.config import CLIConfig, get_settings
from wren_cli.core.exceptions import ConfigError, GraphQLError, TransportError

logger = logging.getLogger(__name__)

GRAPHQL_PATH = "/api/graphql"

# Bodies quoted in error messages are cut to this many characters
_BODY_PREVIEW = 500


def _preview(text: str) -> str:
    if len(text) <= _BODY_PREVIEW:
        return text
    return text[:_BODY_PREVIEW] + "..."


class WrenTransport:
    """Authenticated connection to one server endpoint.

    Holds a single ``httpx.Client``; requests are sent one at a time and
    never retried.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        project_id: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.project_id = project_id or None

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if self.project_id:
            headers["X-Project-Id"] = self.project_id

        self._client = httpx.Client(
            base_url=self.endpoint,
            headers=headers,
            timeout=timeout if timeout is not None else get_settings().request_timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: CLIConfig,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "WrenTransport":
        """Build a transport from the persisted config."""
        if not config.endpoint:
            raise ConfigError("endpoint not configured. Run: wren login")
        if not config.api_key:
            raise ConfigError("API key not configured. Run: wren login")
        return cls(
            config.endpoint,
            config.api_key,
            project_id=config.project_id,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "WrenTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send one request and return the response without checking its status."""
        kwargs: dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"request failed: {method} {path}: {e}") from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        return response

    @staticmethod
    def decode(response: httpx.Response) -> Any:
        """Decode a JSON body, failing with the offending text on error."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"parsing response: {e} (body: {_preview(response.text)})",
                response.status_code,
                response.text,
            ) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code}: {_preview(response.text)}",
                response.status_code,
                response.text,
            )

    def raw_get(self, path: str) -> httpx.Response:
        return self.request("GET", path)

    def get_json(self, path: str) -> Any:
        response = self.request("GET", path)
        self._raise_for_status(response)
        return self.decode(response)

    def post_json(self, path: str, payload: Any) -> Any:
        response = self.request("POST", path, json=payload)
        self._raise_for_status(response)
        return self.decode(response)

    def put_json(self, path: str, payload: Any) -> Any:
        response = self.request("PUT", path, json=payload)
        self._raise_for_status(response)
        return self.decode(response)

    def delete(self, path: str) -> None:
        response = self.request("DELETE", path)
        self._raise_for_status(response)

    def post_embedded(
        self, path: str, payload: Any, timeout: float | None = None
    ) -> tuple[int, Any]:
        """POST and decode the body whatever the status.

        The caller decides whether the status/body pair is a success, an
        embedded failure or a transport failure.
        """
        response = self.request("POST", path, json=payload, timeout=timeout)
        return response.status_code, self.decode(response)

    def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL document and return its ``data`` object.

        Raises:
            TransportError: On a non-200 status or an undecodable body
            GraphQLError: When the response carries an ``errors`` array
        """
        body: dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables

        response = self.request("POST", GRAPHQL_PATH, json=body)
        if response.status_code != 200:
            raise TransportError(
                f"GraphQL HTTP {response.status_code}: {_preview(response.text)}",
                response.status_code,
                response.text,
            )

        result = self.decode(response)
        if not isinstance(result, dict):
            raise TransportError(
                f"parsing response: expected a JSON object (body: {_preview(response.text)})",
                response.status_code,
                response.text,
            )

        errors = result.get("errors") or []
        if errors:
            raise GraphQLError(
                [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
            )
        return result.get("data") or {}
