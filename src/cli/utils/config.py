"""Configuration file management for CLI."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from src.copyid.agent import DEFAULT_AGENT_COMMAND
from src.copyid.exceptions import HomeDirUnavailable
from src.copyid.resolver import home_dir

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".copyid"


@dataclass
class CopyIdConfig:
    """Settings loaded from the config file, with built-in defaults."""

    ssh_command: str = "ssh"
    ssh_options: tuple[str, ...] = ()
    agent_command: tuple[str, ...] = DEFAULT_AGENT_COMMAND
    port: Optional[str] = None
    source: Optional[Path] = field(default=None, compare=False)


class ConfigError(Exception):
    """Configuration file error."""

    pass


def _home_config_dir() -> Optional[Path]:
    try:
        return home_dir() / CONFIG_DIR_NAME
    except HomeDirUnavailable:
        logger.debug("No home directory; config file disabled")
        return None


def _string_list(data: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"Invalid config: {key} must be a string or list of strings")
    return tuple(value)


class ConfigManager:
    """Manages optional settings in ~/.copyid/config.yaml."""

    # None means ~/.copyid, looked up when a manager is created.
    DEFAULT_DIR: Optional[Path] = None
    CONFIG_FILE = "config.yaml"

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        self._config_dir = config_dir or self.DEFAULT_DIR or _home_config_dir()
        self._config_path = (
            self._config_dir / self.CONFIG_FILE if self._config_dir is not None else None
        )

    @property
    def config_dir(self) -> Optional[Path]:
        return self._config_dir

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def exists(self) -> bool:
        """Check if a configuration file exists."""
        return self._config_path is not None and self._config_path.exists()

    def load(self) -> CopyIdConfig:
        """Load configuration. A missing file yields the defaults.

        Raises ConfigError if the file is unreadable or malformed.
        """
        if not self.exists():
            return CopyIdConfig()

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read {self._config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self._config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Invalid config: expected a mapping at top level")

        ssh_command = data.get("ssh_command", "ssh")
        if not isinstance(ssh_command, str) or not ssh_command.strip():
            raise ConfigError("Invalid config: ssh_command must be a non-empty string")

        port = data.get("port")
        if port is not None:
            if isinstance(port, bool) or not isinstance(port, (int, str)):
                raise ConfigError("Invalid config: port must be a number")
            port = str(port)

        agent_command = _string_list(data, "agent_command", DEFAULT_AGENT_COMMAND)
        if not agent_command:
            raise ConfigError("Invalid config: agent_command cannot be empty")

        return CopyIdConfig(
            ssh_command=ssh_command.strip(),
            ssh_options=_string_list(data, "ssh_options", ()),
            agent_command=agent_command,
            port=port,
            source=self._config_path,
        )

    def save(self, config: CopyIdConfig) -> None:
        """Write configuration to file."""
        if self._config_dir is None or self._config_path is None:
            raise ConfigError("No config directory: home directory is unavailable")
        self._config_dir.mkdir(parents=True, exist_ok=True)

        config_data: dict[str, Any] = {
            "ssh_command": config.ssh_command,
            "ssh_options": list(config.ssh_options),
            "agent_command": list(config.agent_command),
        }
        if config.port is not None:
            config_data["port"] = config.port

        with open(self._config_path, "w") as f:
            yaml.safe_dump(config_data, f, default_flow_style=False)
