"""Environment variable and configuration file loading."""

from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR_NAME = ".securitytester"


def is_global_config_dir(path: Path) -> bool:
    """Return True if the path is the global ~/.securitytester config directory."""
    home_config = Path.home() / CONFIG_DIR_NAME
    try:
        return path.resolve() == home_config.resolve()
    except FileNotFoundError:
        return path == home_config


def find_project_dir(start: Path | None = None) -> Path | None:
    """Find the nearest ancestor holding a .securitytester directory."""
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        marker = candidate / CONFIG_DIR_NAME
        if marker.is_dir() and not is_global_config_dir(marker):
            return candidate
    return None


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.securitytester/config.yml."""
    config_path = Path.home() / CONFIG_DIR_NAME / "config.yml"
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


def get_project_env_path(project_dir: Path) -> Path:
    return project_dir / CONFIG_DIR_NAME / ".env"


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load project-specific configuration from .env file."""
    if project_dir is None:
        project_dir = find_project_dir()

    if project_dir:
        return load_env_file(get_project_env_path(project_dir))

    return {}
