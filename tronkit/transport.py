"""JSON-over-HTTP transport shared by full node and solidity node clients."""

from __future__ import annotations

import json
from typing import Any, Optional

import requests

from .txmodels import JsonModel

_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class RpcError(Exception):
    """Raised when a node request fails or the node reports an error."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class NodeClient:
    """Sends JSON requests to a TRON node HTTP API rooted at ``base_url``."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def __enter__(self) -> "NodeClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._owns_session:
            self.session.close()

    def _request(self, method: str, path: str, body: Any) -> dict:
        endpoint = self.base_url + path
        where = f"({method} {endpoint})"

        data = None
        if body is not None:
            payload = body.to_dict() if isinstance(body, JsonModel) else body
            try:
                data = json.dumps(payload).encode("utf-8")
            except (TypeError, ValueError) as err:
                raise RpcError(f"failed to marshal JSON request body {where}: {err}") from err

        try:
            response = self.session.request(
                method, endpoint, data=data, headers=_HEADERS, timeout=self.timeout
            )
        except requests.RequestException as err:
            raise RpcError(f"failed to execute HTTP request {where}: {err}") from err

        # The node answers 200 for every success.
        if response.status_code != 200:
            raise RpcError(
                f"invalid http status {where}: {response.status_code}",
                status=response.status_code,
            )

        try:
            decoded = json.loads(response.content)
        except ValueError as err:
            raise RpcError(
                f"failed to unmarshal JSON response for error check {where}: {err}"
            ) from err
        if decoded is None:
            return {}
        if not isinstance(decoded, dict):
            raise RpcError(
                f"failed to unmarshal JSON response for error check {where}: "
                f"expected object, got {type(decoded).__name__}"
            )

        if "Error" in decoded:
            error = decoded["Error"]
            if not isinstance(error, str):
                raise RpcError(f"failed to read JSON error field as string {where}: {error!r}")
            raise RpcError(f"RPC returned error {where}: {error}")

        return decoded

    def post(self, endpoint: str, body: Any) -> dict:
        """POST ``body`` as JSON to ``endpoint`` and return the decoded response object."""
        return self._request("POST", endpoint, body)

    def get(self, endpoint: str) -> dict:
        """GET ``endpoint`` and return the decoded response object."""
        return self._request("GET", endpoint, None)