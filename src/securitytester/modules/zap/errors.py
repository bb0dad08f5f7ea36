"""Exception types raised while driving a ZAP instance."""


class ZapError(Exception):
    """Base class for all ZAP orchestration errors."""


class ConfigurationError(ZapError, ValueError):
    """Construction input is malformed (for example a non-numeric port)."""


class SetupFailure(ZapError):
    """Session, context or scope setup on the ZAP instance failed."""


class ZapApiError(ZapError):
    """A call to the ZAP API failed or returned an unusable payload."""

    def __init__(self, message: str, code: str = ""):
        super().__init__(message)
        self.code = code


class ScanCancelled(ZapError):
    """A blocking wait was cancelled before the remote work finished."""
