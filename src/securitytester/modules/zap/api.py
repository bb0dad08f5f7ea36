"""Capability contract for talking to a ZAP instance."""

from abc import ABC, abstractmethod

from .models import Alert


class ZapApi(ABC):
    """The subset of the ZAP API the scanner orchestration depends on.

    Every method raises ``ZapApiError`` when the remote call fails.
    """

    # Session and context

    @abstractmethod
    def new_session(self, name: str | None = None, overwrite: bool = True) -> None:
        """Start a new session, discarding the current one."""

    @abstractmethod
    def new_context(self, name: str) -> str:
        """Create a context and return its id."""

    @abstractmethod
    def set_context_in_scope(self, name: str, in_scope: bool) -> None:
        """Mark a context as in or out of scope."""

    @abstractmethod
    def include_in_context(self, name: str, regex: str) -> None:
        """Add a URL regex to the context's include list."""

    # Spider

    @abstractmethod
    def spider_scan(self, url: str) -> str:
        """Start a spider run and return its scan id."""

    @abstractmethod
    def spider_status(self, scan_id: str) -> int:
        """Return spider progress for a run as a percentage."""

    # Active scan

    @abstractmethod
    def enable_all_active_scanners(self, policy: str | None = None) -> None:
        """Enable every active scan rule in a policy."""

    @abstractmethod
    def active_scan(
        self,
        url: str,
        recurse: bool = True,
        in_scope_only: bool = False,
        policy: str | None = None,
    ) -> str:
        """Start an active scan and return its scan id."""

    @abstractmethod
    def active_scan_status(self, scan_id: str | None = None) -> int:
        """Return active scan progress as a percentage (latest run when no id)."""

    @abstractmethod
    def access_url(self, url: str, follow_redirects: bool = False) -> None:
        """Have ZAP request a URL so it lands in the site tree."""

    @abstractmethod
    def urls(self, base_url: str | None = None) -> list[str]:
        """Return URLs ZAP has recorded, optionally under a base URL."""

    # Passive scan

    @abstractmethod
    def set_passive_enabled(self, enabled: bool) -> None:
        """Switch passive scanning on or off."""

    @abstractmethod
    def enable_all_passive_scanners(self) -> None:
        """Enable every passive scan rule."""

    @abstractmethod
    def disable_all_passive_scanners(self) -> None:
        """Disable every passive scan rule."""

    # Alerts

    @abstractmethod
    def number_of_alerts(self, base_url: str) -> int:
        """Return how many alerts are recorded for a base URL."""

    @abstractmethod
    def alerts(
        self,
        base_url: str,
        start: int | None = None,
        count: int | None = None,
    ) -> list[Alert]:
        """Return alerts for a base URL; no start/count means all of them."""
