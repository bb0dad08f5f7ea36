"""
Configuration management for SecurityTester.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (.securitytester/.env)
3. Global config file (~/.securitytester/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    find_project_dir,
    get_project_env_path,
    is_global_config_dir,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    ZapConnection,
    get_bool,
    get_config,
    get_zap_api_key,
    get_zap_settings,
    is_verbose,
)

__all__ = [
    # env_loader
    "find_project_dir",
    "get_project_env_path",
    "is_global_config_dir",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "ZapConnection",
    "get_bool",
    "get_config",
    "get_zap_api_key",
    "get_zap_settings",
    "is_verbose",
]
