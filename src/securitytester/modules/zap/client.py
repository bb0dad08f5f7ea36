"""HTTP client for the ZAP JSON API."""

import logging
from typing import Any

import httpx

from .api import ZapApi
from .client_core_mixin import ClientCoreMixin
from .client_scan_mixin import ClientScanMixin
from .errors import ZapApiError

logger = logging.getLogger(__name__)


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ZapClient(ClientCoreMixin, ClientScanMixin, ZapApi):
    """Talk to a running ZAP daemon over ``/JSON/<component>/<kind>/<name>/``."""

    def __init__(
        self,
        api_key: str | None,
        host: str = "localhost",
        port: int = 8080,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = f"http://{host}:{port}"
        headers = {"Accept": "application/json"}
        if api_key:
            headers["X-ZAP-API-Key"] = api_key
        self.client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "ZapClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _call(self, component: str, kind: str, name: str, /, **params: Any) -> dict[str, Any]:
        """Issue one API request and return the decoded JSON object."""
        path = f"/JSON/{component}/{kind}/{name}/"
        query = {key: _encode(value) for key, value in params.items() if value is not None}
        logger.debug("ZAP API GET %s %s", path, query)
        try:
            response = self.client.get(path, params=query)
        except httpx.HTTPError as exc:
            raise ZapApiError(f"{component}.{name} request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            code = ""
            message = response.text[:200]
            if isinstance(payload, dict):
                code = str(payload.get("code", ""))
                message = str(payload.get("message") or message)
            raise ZapApiError(
                f"{component}.{name} failed with HTTP {response.status_code}: {message}",
                code=code,
            )
        if not isinstance(payload, dict):
            raise ZapApiError(f"{component}.{name} returned a non-JSON response")
        return payload

    def _value(self, payload: dict[str, Any], key: str) -> Any:
        if key not in payload:
            raise ZapApiError(f"ZAP response is missing '{key}': {payload}")
        return payload[key]

    def _int_value(self, payload: dict[str, Any], key: str = "status") -> int:
        value = self._value(payload, key)
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ZapApiError(f"ZAP returned a non-numeric {key}: {value!r}") from exc
