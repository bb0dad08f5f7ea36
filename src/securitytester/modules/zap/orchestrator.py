"""Drive one scanning engagement against a ZAP instance."""

import logging
from collections.abc import Callable

from .api import ZapApi
from .client import ZapClient
from .errors import ConfigurationError, ScanCancelled, SetupFailure, ZapApiError
from .models import Alert, ScanSettings
from .reporting import format_alert_line
from .waiting import Pause

logger = logging.getLogger(__name__)


def parse_port(port: str | int) -> int:
    """Return a valid TCP port number or raise ConfigurationError."""
    try:
        value = int(str(port).strip())
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"ZAP port must be an integer, got {port!r}") from exc
    if not 0 < value < 65536:
        raise ConfigurationError(f"ZAP port out of range: {value}")
    return value


class ZapScanner:
    """Session, scope, spider, active/passive scans and alert retrieval on one ZAP instance.

    One session and one scope context are created at construction and reused for
    every scan on the instance. Calls must be serialized: the instance is not safe
    to share between concurrently running scans.

    Failures during scan coordination are logged and turned into an empty alert
    list; the last such failure is kept on ``last_error``. Only configuration and
    setup failures raise.
    """

    def __init__(
        self,
        api_key: str | None,
        host: str,
        port: str | int,
        with_spider: bool,
        *,
        api: ZapApi | None = None,
        settings: ScanSettings | None = None,
        pause: Callable[[float], None] | None = None,
    ):
        port_number = parse_port(port)
        self.with_spider = with_spider
        self.settings = settings or ScanSettings()
        self.last_error: Exception | None = None
        self._owns_api = api is None
        self.api: ZapApi = api if api is not None else ZapClient(api_key, host, port_number)
        self._pause = pause if pause is not None else Pause()

        context = self.settings.context_name
        try:
            self.api.new_session(self.settings.session_name, overwrite=True)
            self.api.new_context(context)
            self.api.set_context_in_scope(context, True)
        except ZapApiError as exc:
            self.close()
            raise SetupFailure(f"Could not prepare ZAP session/context: {exc}") from exc
        logger.debug(
            "ZAP session '%s' ready with context '%s'", self.settings.session_name, context
        )

    def close(self) -> None:
        if self._owns_api and isinstance(self.api, ZapClient):
            self.api.close()

    def __enter__(self) -> "ZapScanner":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def cancel(self) -> None:
        """Interrupt the current or next wait; the remote scan keeps running."""
        cancel = getattr(self._pause, "cancel", None)
        if cancel is not None:
            cancel()

    def complete_scan(
        self,
        base_url: str,
        in_scope_only: bool,
        scan_policy_name: str | None = None,
    ) -> list[Alert]:
        """Spider (when enabled) and actively scan ``base_url`` with all policy rules."""
        self.last_error = None
        try:
            self.api.include_in_context(self.settings.context_name, base_url + ".*")
        except ZapApiError as exc:
            raise SetupFailure(f"Could not add {base_url} to the scan scope: {exc}") from exc

        alerts: list[Alert] = []
        logger.info("Started complete scan")
        try:
            if self.with_spider:
                self.spider(base_url)
                self._pause(self.settings.spider_settle_delay)
            else:
                logger.info("Spider is deactivated")
            alerts.extend(self.all_active_scan(base_url, in_scope_only, scan_policy_name))
        except ScanCancelled as exc:
            self.last_error = exc
            logger.error("complete scan failed: %s", exc)
        logger.info("Finished complete scan")
        return alerts

    def spider(self, base_url: str) -> None:
        """Crawl ``base_url`` and block until the spider reports 100%."""
        logger.info("Started Spider")
        try:
            scan_id = self.api.spider_scan(base_url)
            while True:
                self._pause(self.settings.spider_poll_interval)
                progress = self.api.spider_status(scan_id)
                logger.info("Spider progress : %d%%", progress)
                if progress >= 100:
                    break
            logger.info("Spider complete")
        except (ZapApiError, ScanCancelled) as exc:
            self.last_error = exc
            logger.error("Spider failed: %s", exc)

    def all_active_scan(
        self,
        base_url: str,
        in_scope_only: bool,
        scan_policy_name: str | None = None,
    ) -> list[Alert]:
        """Enable every rule of the policy, then run ``active_scan``."""
        try:
            self.api.enable_all_active_scanners(scan_policy_name)
        except ZapApiError as exc:
            self.last_error = exc
            logger.error("All Active Scan failed: %s", exc)
            return []
        return self.active_scan(base_url, in_scope_only, scan_policy_name)

    def active_scan(
        self,
        base_url: str,
        in_scope_only: bool,
        scan_policy_name: str | None = None,
    ) -> list[Alert]:
        """Run an active scan, wait for it to finish and return sorted alerts."""
        try:
            logger.info("Started active scan")
            # ZAP only scans URLs already in its site tree; a second access
            # works around its cached crawl state.
            if base_url not in self.api.urls(base_url):
                self.api.access_url(base_url)
                self.api.access_url(base_url)

            scan_id = self.api.active_scan(
                base_url,
                recurse=True,
                in_scope_only=in_scope_only,
                policy=scan_policy_name,
            )

            progress = 0
            while progress < 100:
                previous = progress
                self._pause(self.settings.scan_poll_interval)
                progress = self.api.active_scan_status(scan_id)
                if progress != previous:
                    logger.debug("Scan progress : %d %%", progress)
            logger.info("Finished active scan")

            return self.show_alerts(base_url)
        except (ZapApiError, ScanCancelled) as exc:
            self.last_error = exc
            logger.error("Active Scan failed: %s", exc)
            return []

    def enable_passive_scan(self) -> None:
        try:
            self.api.set_passive_enabled(True)
            self.api.enable_all_passive_scanners()
        except ZapApiError as exc:
            self.last_error = exc
            logger.error("Enable Passive Scan failed: %s", exc)

    def disable_passive_scan(self) -> None:
        try:
            self.api.disable_all_passive_scanners()
        except ZapApiError as exc:
            self.last_error = exc
            logger.error("Disable Passive Scan failed: %s", exc)

    def show_alerts(self, base_url: str) -> list[Alert]:
        """Wait for alerts to settle, then fetch, sort by risk and log them."""
        self.wait_for_alerts(base_url)
        alerts = sorted(self.get_alerts(base_url), key=lambda alert: alert.risk)

        logger.info("Found %d Alerts:", len(alerts))
        for alert in alerts:
            logger.info("%s", format_alert_line(alert))
        return alerts

    def wait_for_alerts(self, base_url: str) -> int:
        """Poll the alert count until it is nonzero and unchanged, or the check cap.

        Returns the number of count queries made.
        """
        checks = 0
        queries = 1
        previous = 0
        current = self.number_of_alerts(base_url)
        while current == 0 or current > previous:
            checks += 1
            if checks >= self.settings.alert_max_checks:
                break
            previous = current
            try:
                self._pause(self.settings.alert_poll_interval)
            except ScanCancelled as exc:
                logger.error("Wait for Alerts failed: %s", exc)
                break
            current = self.number_of_alerts(base_url)
            queries += 1
        return queries

    def get_alerts(self, base_url: str) -> list[Alert]:
        return self.api.alerts(base_url)

    def number_of_alerts(self, base_url: str) -> int:
        return self.api.number_of_alerts(base_url)
