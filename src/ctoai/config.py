"""Configuration management for ctoai.

The op runtime describes its environment through environment variables.
They are read once by load_config() and handed to each facade.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_HOST_PLATFORM = "unknown"
DEFAULT_INTERFACE_TYPE = "terminal"
DEFAULT_HOME_DIR = "/root"
DEFAULT_DAEMON_HOST = "127.0.0.1"

STATE_FILE = "state.json"
CONFIG_FILE = "config.json"


@dataclass(frozen=True)
class SdkConfig:
    """Op runtime configuration.

    Attributes:
        state_dir: Directory holding state local to this workflow
        config_dir: Directory holding config local to this op
        daemon_port: Port the SDK daemon listens on
        daemon_host: Host the SDK daemon listens on
        host_platform: Operating system of the machine running the op
        interface_type: Interface the op is attached to (terminal, slack)
        home_dir: Home directory of the op user
    """

    state_dir: str
    config_dir: str
    daemon_port: int
    daemon_host: str = DEFAULT_DAEMON_HOST
    host_platform: str = DEFAULT_HOST_PLATFORM
    interface_type: str = DEFAULT_INTERFACE_TYPE
    home_dir: str = DEFAULT_HOME_DIR

    @property
    def daemon_url(self) -> str:
        return f"http://{self.daemon_host}:{self.daemon_port}"

    @property
    def state_file(self) -> str:
        return os.path.join(self.state_dir, STATE_FILE)

    @property
    def config_file(self) -> str:
        return os.path.join(self.config_dir, CONFIG_FILE)


def _getenv(environ: Mapping[str, str], name: str, fallback: str) -> str:
    # Empty values count as unset
    return environ.get(name) or fallback


def load_config(environ: Mapping[str, str] | None = None) -> SdkConfig:
    """Load configuration from the environment.

    Args:
        environ: Mapping to read instead of os.environ

    Returns:
        Validated SdkConfig.

    Raises:
        ConfigError: If a required variable is missing or invalid. Every
            problem is reported at once.
    """
    if environ is None:
        environ = os.environ

    state_dir = environ.get("SDK_STATE_DIR", "")
    config_dir = environ.get("SDK_CONFIG_DIR", "")
    port_str = environ.get("SDK_SPEAK_PORT", "")

    # Validate required fields
    missing = []
    if not state_dir:
        missing.append("SDK_STATE_DIR")
    if not config_dir:
        missing.append("SDK_CONFIG_DIR")
    if not port_str:
        missing.append("SDK_SPEAK_PORT")

    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}",
            missing=missing,
        )

    try:
        port = int(port_str)
    except ValueError:
        raise ConfigError(f"SDK_SPEAK_PORT must be an integer, got {port_str!r}") from None
    if not 0 < port < 65536:
        raise ConfigError(f"SDK_SPEAK_PORT out of range: {port}")

    return SdkConfig(
        state_dir=state_dir,
        config_dir=config_dir,
        daemon_port=port,
        daemon_host=_getenv(environ, "SDK_DAEMON_HOST", DEFAULT_DAEMON_HOST),
        host_platform=_getenv(environ, "OPS_HOST_PLATFORM", DEFAULT_HOST_PLATFORM),
        interface_type=_getenv(environ, "SDK_INTERFACE_TYPE", DEFAULT_INTERFACE_TYPE),
        home_dir=_getenv(environ, "SDK_HOME_DIR", DEFAULT_HOME_DIR),
    )
