"""Spider, active scan and passive scan calls for ZapClient."""


class ClientScanMixin:
    """ZAP ``spider``, ``ascan`` and ``pscan`` components."""

    def spider_scan(self, url: str) -> str:
        payload = self._call("spider", "action", "scan", url=url)
        return str(self._value(payload, "scan"))

    def spider_status(self, scan_id: str) -> int:
        return self._int_value(self._call("spider", "view", "status", scanId=scan_id))

    def enable_all_active_scanners(self, policy: str | None = None) -> None:
        self._call("ascan", "action", "enableAllScanners", scanPolicyName=policy or None)

    def active_scan(
        self,
        url: str,
        recurse: bool = True,
        in_scope_only: bool = False,
        policy: str | None = None,
    ) -> str:
        payload = self._call(
            "ascan",
            "action",
            "scan",
            url=url,
            recurse=recurse,
            inScopeOnly=in_scope_only,
            scanPolicyName=policy or None,
        )
        return str(self._value(payload, "scan"))

    def active_scan_status(self, scan_id: str | None = None) -> int:
        return self._int_value(self._call("ascan", "view", "status", scanId=scan_id))

    def set_passive_enabled(self, enabled: bool) -> None:
        self._call("pscan", "action", "setEnabled", enabled=enabled)

    def enable_all_passive_scanners(self) -> None:
        self._call("pscan", "action", "enableAllScanners")

    def disable_all_passive_scanners(self) -> None:
        self._call("pscan", "action", "disableAllScanners")
