"""Configuration loader for FTP client settings from environment variables."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass
class ServerConfig:
    """Server connection configuration."""

    host: str
    port: int
    username: str
    password: str


class ConfigLoader:
    """Load client configuration from environment variables."""

    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            env_file: Path to .env file. If None, uses default .env location.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        self._passive_mode = self._get_bool("FTP_PASSIVE_MODE", True)
        self._active_host = os.getenv("FTP_ACTIVE_HOST", "127.0.0.1")
        self._active_port_attempts = self._get_int("FTP_ACTIVE_PORT_ATTEMPTS", 10)
        self._chunk_size = self._get_int("FTP_CHUNK_SIZE", 4096)

        self._timeout = self._get_float("FTP_TIMEOUT")

    @property
    def passive_mode(self) -> bool:
        """Get passive mode setting."""
        return self._passive_mode

    @property
    def active_host(self) -> str:
        """Get address the active-mode listener binds to."""
        return self._active_host

    @property
    def active_port_attempts(self) -> int:
        """Get number of ports probed for the active-mode listener."""
        return self._active_port_attempts

    @property
    def chunk_size(self) -> int:
        """Get transfer chunk size in bytes."""
        return self._chunk_size

    @property
    def timeout(self) -> Optional[float]:
        """Get socket timeout in seconds (None blocks indefinitely)."""
        return self._timeout

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Get boolean value from environment variable."""
        value = os.getenv(key, str(default)).lower()
        return value in ("true", "1", "yes", "on")

    def _get_int(self, key: str, default: int) -> int:
        """Get integer value from environment variable."""
        value = os.getenv(key, str(default))
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Invalid integer for {key}: {value}")

    def _get_float(self, key: str) -> Optional[float]:
        """Get optional float value from environment variable."""
        value = os.getenv(key, "")
        if not value:
            return None
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"Invalid float for {key}: {value}")

    def get_server_config(self) -> ServerConfig:
        """Get server connection details.

        Returns:
            ServerConfig with host, port and credentials

        Raises:
            ValueError: If the port is not a number
        """
        host = os.getenv("FTP_HOST", "localhost")

        port_str = os.getenv("FTP_PORT", "21")
        try:
            port = int(port_str)
        except ValueError:
            raise ValueError(f"Invalid port for {host}: {port_str}")

        return ServerConfig(
            host=host,
            port=port,
            username=os.getenv("FTP_USER", ""),
            password=os.getenv("FTP_PASS", ""),
        )


# Global config instance
_config: Optional[ConfigLoader] = None


def get_config(env_file: Optional[str] = None) -> ConfigLoader:
    """Get or create the global configuration loader.

    Args:
        env_file: Path to .env file (only used on first call)

    Returns:
        ConfigLoader instance
    """
    global _config
    if _config is None:
        _config = ConfigLoader(env_file)
    return _config
