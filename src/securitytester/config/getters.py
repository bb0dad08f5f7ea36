"""Configuration getter functions."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .env_loader import load_global_config, load_project_config

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ZapConnection:
    """Settings needed to reach a ZAP daemon and run a scan."""

    api_key: str | None
    host: str
    port: str
    with_spider: bool
    scan_policy: str | None = None


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        project_dir: Optional project directory
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check project .env file
    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    # 3. Check global config
    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    # 4. Return default
    return default


def get_bool(key: str, project_dir: Path | None = None, default: bool = False) -> bool:
    value = get_config(key, project_dir)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def get_zap_api_key(project_dir: Path | None = None) -> str | None:
    return get_config("SECURITYTESTER_ZAP_API_KEY", project_dir)


def get_zap_settings(project_dir: Path | None = None) -> ZapConnection:
    """Resolve the ZAP connection settings.

    The port is kept as given so a malformed value is reported when the
    scanner is constructed.
    """
    return ZapConnection(
        api_key=get_zap_api_key(project_dir),
        host=str(get_config("SECURITYTESTER_ZAP_HOST", project_dir, default="localhost")),
        port=str(get_config("SECURITYTESTER_ZAP_PORT", project_dir, default="8080")),
        with_spider=get_bool("SECURITYTESTER_ZAP_SPIDER", project_dir, default=True),
        scan_policy=get_config("SECURITYTESTER_SCAN_POLICY", project_dir) or None,
    )


def is_verbose(project_dir: Path | None = None) -> bool:
    return get_bool("SECURITYTESTER_VERBOSE", project_dir)
