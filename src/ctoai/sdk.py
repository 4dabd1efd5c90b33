"""State, config, secret and telemetry operations for ops."""

import logging
from typing import Any

from .config import SdkConfig, load_config
from .daemon.client import DaemonClient
from .daemon.models import GetSecretBody, SetSecretBody
from .errors import DaemonRequestError, DaemonResponseError
from .storage.kvfile import KVFile
from .values import JsonKind, JsonValue

logger = logging.getLogger(__name__)


class Sdk:
    """Entry point for the op runtime's non-presentation features.

    Example:
        sdk = Sdk()
        sdk.set_state("count", 3)
        sdk.get_state("count").as_number()  # 3
    """

    def __init__(
        self, config: SdkConfig | None = None, client: DaemonClient | None = None
    ) -> None:
        """Initialize SDK.

        Args:
            config: Runtime configuration. Loaded from the environment if omitted.
            client: Daemon client. Built from config if omitted.

        Raises:
            ConfigError: If config is omitted and the environment is incomplete
        """
        self.config = config if config is not None else load_config()
        self.client = client if client is not None else DaemonClient(self.config)

    def get_host_os(self) -> str:
        """Return the operating system of the host running the op."""
        return self.config.host_platform

    def get_interface_type(self) -> str:
        """Return the interface the op is attached to (terminal or slack)."""
        return self.config.interface_type

    def home_dir(self) -> str:
        return self.config.home_dir

    def get_state_path(self) -> str:
        """Return the state directory, local to this particular workflow."""
        return self.config.state_dir

    def get_config_path(self) -> str:
        """Return the config directory, local to this particular op."""
        return self.config.config_dir

    def get_state(self, key: str) -> JsonValue | None:
        return KVFile(self.config.state_file).get(key)

    def set_state(self, key: str, value: Any) -> None:
        KVFile(self.config.state_file).set(key, value)

    def get_config(self, key: str) -> JsonValue | None:
        return KVFile(self.config.config_file).get(key)

    def set_config(self, key: str, value: Any) -> None:
        KVFile(self.config.config_file).set(key, value)

    def get_secret(self, key: str) -> str:
        """Request a secret from the secret store by key.

        If the secret exists the daemon returns it and tells the user it is
        in use. Otherwise the daemon prompts the user for a replacement.

        Args:
            key: Name of the secret

        Returns:
            Secret value

        Raises:
            DaemonRequestError: If the daemon could not be reached
            DaemonResponseError: If the response does not contain the key
                as a string
        """
        body = self.client.async_request("secret/get", GetSecretBody(key=key))

        value = body.get(key)
        if value is None:
            raise DaemonResponseError(
                f"secret/get response missing expected key {key!r}"
            )
        if value.kind is not JsonKind.STRING:
            raise DaemonResponseError(
                f"secret/get response for {key!r} is a {value.kind.value}, expected string"
            )
        return value.as_str()

    def set_secret(self, key: str, value: str) -> str:
        """Store a secret in the secret store.

        If the secret already exists the daemon asks the user whether to
        overwrite it.

        Args:
            key: Name of the secret
            value: Secret value

        Returns:
            The key the daemon confirmed it stored

        Raises:
            DaemonRequestError: If the daemon could not be reached
            DaemonResponseError: If the daemon did not confirm the key
        """
        body = self.client.async_request(
            "secret/set", SetSecretBody(key=key, value=value)
        )

        stored = body.get("key")
        if stored is None or stored.kind is not JsonKind.STRING:
            raise DaemonResponseError(f"secret set of {key!r} failed")
        return stored.as_str()

    def track(
        self, tags: list[str], event: str, metadata: dict[str, Any] | None = None
    ) -> None:
        """Send an event to the analytics system.

        Tags, event name and metadata are merged into one flat body. Delivery
        is best effort: failures are logged and never raised.

        Example:
            sdk.track(["sdk", "python", "tracked"], "testing", {"user": "name"})
        """
        request_body: dict[str, Any] = {"tags": list(tags), "event": event}
        if metadata:
            request_body.update(metadata)

        try:
            self.client.simple_request("track", request_body)
        except DaemonRequestError as e:
            logger.debug(f"Dropping track event {event!r}: {e}")
