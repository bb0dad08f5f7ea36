"""Session, context, URL and alert calls for ZapClient."""

from .errors import ZapApiError
from .models import Alert


class ClientCoreMixin:
    """ZAP ``core`` and ``context`` components."""

    def new_session(self, name: str | None = None, overwrite: bool = True) -> None:
        self._call("core", "action", "newSession", name=name, overwrite=overwrite)

    def new_context(self, name: str) -> str:
        payload = self._call("context", "action", "newContext", contextName=name)
        return str(self._value(payload, "contextId"))

    def set_context_in_scope(self, name: str, in_scope: bool) -> None:
        self._call(
            "context", "action", "setContextInScope", contextName=name, booleanInScope=in_scope
        )

    def include_in_context(self, name: str, regex: str) -> None:
        self._call("context", "action", "includeInContext", contextName=name, regex=regex)

    def access_url(self, url: str, follow_redirects: bool = False) -> None:
        self._call("core", "action", "accessUrl", url=url, followRedirects=follow_redirects)

    def urls(self, base_url: str | None = None) -> list[str]:
        payload = self._call("core", "view", "urls", baseurl=base_url)
        urls = self._value(payload, "urls")
        if not isinstance(urls, list):
            raise ZapApiError(f"ZAP returned malformed urls: {urls!r}")
        return [str(url) for url in urls]

    def number_of_alerts(self, base_url: str) -> int:
        payload = self._call("core", "view", "numberOfAlerts", baseurl=base_url)
        return self._int_value(payload, "numberOfAlerts")

    def alerts(
        self,
        base_url: str,
        start: int | None = None,
        count: int | None = None,
    ) -> list[Alert]:
        payload = self._call("core", "view", "alerts", baseurl=base_url, start=start, count=count)
        items = self._value(payload, "alerts")
        if not isinstance(items, list):
            raise ZapApiError(f"ZAP returned malformed alerts: {items!r}")
        try:
            return [Alert.from_api(item) for item in items if isinstance(item, dict)]
        except ValueError as exc:
            raise ZapApiError(f"ZAP returned an unparseable alert: {exc}") from exc
