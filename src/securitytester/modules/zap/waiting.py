"""Interruptible fixed-delay waits used by the poll loops."""

import threading

from .errors import ScanCancelled


class Pause:
    """Sleep for a fixed delay unless cancelled from another thread."""

    def __init__(self) -> None:
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Wake any current wait and make every later wait fail."""
        self._cancelled.set()

    def __call__(self, seconds: float) -> None:
        if self._cancelled.wait(max(0.0, seconds)):
            raise ScanCancelled(f"wait of {seconds:.2f}s was cancelled")
