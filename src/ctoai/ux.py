"""Presentation operations: print, spinner and progress bar.

The daemon owns what is on screen. Ux keeps no record of which spinner
or progress bar is active, it only forwards each call.
"""

from .config import SdkConfig, load_config
from .daemon.client import DaemonClient
from .daemon.models import (
    PrintBody,
    ProgressBarAdvanceBody,
    ProgressBarStartBody,
    ProgressBarStopBody,
    SpinnerStartBody,
    SpinnerStopBody,
)


class Ux:
    """Entry point for output on the op's interface (terminal or slack).

    Every method raises DaemonRequestError if the daemon cannot be
    reached or rejects the request.
    """

    def __init__(
        self, config: SdkConfig | None = None, client: DaemonClient | None = None
    ) -> None:
        self.config = config if config is not None else load_config()
        self.client = client if client is not None else DaemonClient(self.config)

    def print(self, text: str) -> None:
        """Print text to the output interface.

        Example:
            Ux().print("testing")
        """
        self.client.simple_request("print", PrintBody(text=text))

    def spinner_start(self, text: str) -> None:
        """Show a spinner that keeps spinning until spinner_stop is called."""
        self.client.simple_request("start-spinner", SpinnerStartBody(text=text))

    def spinner_stop(self, text: str) -> None:
        """Complete the running spinner, replacing its label with text."""
        self.client.simple_request("stop-spinner", SpinnerStopBody(text=text))

    def progress_bar_start(self, length: int, initial: int, text: str) -> None:
        """Show a progress bar that stays until progress_bar_stop is called.

        Args:
            length: Total units in the bar, e.g. 5 for a five step process
            initial: Units already filled when the bar appears
            text: Label shown next to the bar

        Example:
            ux.progress_bar_start(5, 1, "Downloading...")
        """
        self.client.simple_request(
            "progress-bar/start",
            ProgressBarStartBody(length=length, initial=initial, text=text),
        )

    def progress_bar_advance(self, increment: int) -> None:
        """Fill increment more units of the current progress bar."""
        self.client.simple_request(
            "progress-bar/advance", ProgressBarAdvanceBody(increment=increment)
        )

    def progress_bar_stop(self, text: str) -> None:
        self.client.simple_request("progress-bar/stop", ProgressBarStopBody(text=text))
