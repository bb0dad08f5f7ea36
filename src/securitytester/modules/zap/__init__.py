"""ZAP remote API client and scan orchestration."""

from .api import ZapApi
from .client import ZapClient
from .errors import ConfigurationError, ScanCancelled, SetupFailure, ZapApiError, ZapError
from .models import Alert, Confidence, Risk, ScanSettings
from .orchestrator import ZapScanner, parse_port
from .reporting import alert_to_dict, format_alert_line, print_alerts_table
from .waiting import Pause

__all__ = [
    "Alert",
    "Confidence",
    "ConfigurationError",
    "Pause",
    "Risk",
    "ScanCancelled",
    "ScanSettings",
    "SetupFailure",
    "ZapApi",
    "ZapApiError",
    "ZapClient",
    "ZapError",
    "ZapScanner",
    "alert_to_dict",
    "format_alert_line",
    "parse_port",
    "print_alerts_table",
]
