"""Typer CLI definition for ctoai.

Exposes the SDK to shell-script ops, e.g.:

    ctoai print "Deploying..."
    ctoai state set attempts 3
    ctoai secret get GITHUB_TOKEN
"""

import json
import logging
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

import typer

from .errors import ConfigError, DaemonRequestError, DaemonResponseError, KVStoreError
from .sdk import Sdk
from .ux import Ux

app = typer.Typer(help="Talk to the CTO.ai op runtime from the command line")
spinner_app = typer.Typer(help="Start and stop spinners")
progress_app = typer.Typer(help="Start, advance and stop progress bars")
state_app = typer.Typer(help="Read and write workflow state")
config_app = typer.Typer(help="Read and write op config")
secret_app = typer.Typer(help="Read and write secrets")

app.add_typer(spinner_app, name="spinner")
app.add_typer(progress_app, name="progress")
app.add_typer(state_app, name="state")
app.add_typer(config_app, name="config")
app.add_typer(secret_app, name="secret")

T = TypeVar("T")

_options = {"debug": False}


def parse_value(raw: str) -> Any:
    """Parse a command line value as JSON, falling back to the raw string.

    Args:
        raw: Value as typed on the command line

    Returns:
        Decoded JSON data, or raw itself if it is not valid JSON
    """
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_metadata(items: list[str]) -> dict[str, Any]:
    """Parse key=value pairs into a metadata mapping.

    Raises:
        ValueError: If an item has no '=' or an empty key
    """
    metadata: dict[str, Any] = {}
    for item in items:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid metadata {item!r}, expected key=value")
        metadata[key] = parse_value(raw)
    return metadata


def _fail(message: str, error: Exception) -> NoReturn:
    if _options["debug"]:
        typer.echo(f"Debug - {message}: {error!r}", err=True)
    else:
        typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1) from None


def _run(action: Callable[[], T]) -> T:
    """Run an SDK call, turning SDK errors into a clean exit."""
    try:
        return action()
    except ConfigError as e:
        _fail("Configuration error", e)
    except DaemonRequestError as e:
        _fail("Daemon request failed", e)
    except DaemonResponseError as e:
        _fail("Unexpected daemon response", e)
    except KVStoreError as e:
        _fail("Storage error", e)
    except ValueError as e:
        _fail("Invalid input", e)


@app.callback()
def main(
    debug: bool = typer.Option(
        False, "--debug", help="Show verbose error messages and daemon requests"
    ),
) -> None:
    """Talk to the CTO.ai op runtime from the command line."""
    _options["debug"] = debug
    # Configure logging for debug mode
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


@app.command("print")
def print_text(text: str = typer.Argument(..., help="Text to print")) -> None:
    """Print text on the op's interface."""
    _run(lambda: Ux().print(text))


@spinner_app.command("start")
def spinner_start(text: str = typer.Argument(..., help="Spinner label")) -> None:
    _run(lambda: Ux().spinner_start(text))


@spinner_app.command("stop")
def spinner_stop(text: str = typer.Argument(..., help="Completion label")) -> None:
    _run(lambda: Ux().spinner_stop(text))


@progress_app.command("start")
def progress_start(
    length: int = typer.Argument(..., help="Total units in the bar"),
    text: str = typer.Argument(..., help="Progress bar label"),
    initial: int = typer.Option(0, "-i", "--initial", help="Units filled at start"),
) -> None:
    _run(lambda: Ux().progress_bar_start(length, initial, text))


@progress_app.command("advance")
def progress_advance(
    increment: int = typer.Argument(1, help="Units to add to the bar"),
) -> None:
    _run(lambda: Ux().progress_bar_advance(increment))


@progress_app.command("stop")
def progress_stop(text: str = typer.Argument(..., help="Completion label")) -> None:
    _run(lambda: Ux().progress_bar_stop(text))


def _echo_value(value: Any) -> None:
    if value is None:
        raise typer.Exit(1)
    typer.echo(json.dumps(value.to_python()))


@state_app.command("get")
def state_get(key: str = typer.Argument(..., help="State key")) -> None:
    """Print a state value as JSON. Exits 1 if the key is not set."""
    _echo_value(_run(lambda: Sdk().get_state(key)))


@state_app.command("set")
def state_set(
    key: str = typer.Argument(..., help="State key"),
    value: str = typer.Argument(..., help="Value, parsed as JSON when possible"),
) -> None:
    _run(lambda: Sdk().set_state(key, parse_value(value)))


@config_app.command("get")
def config_get(key: str = typer.Argument(..., help="Config key")) -> None:
    """Print a config value as JSON. Exits 1 if the key is not set."""
    _echo_value(_run(lambda: Sdk().get_config(key)))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Config key"),
    value: str = typer.Argument(..., help="Value, parsed as JSON when possible"),
) -> None:
    _run(lambda: Sdk().set_config(key, parse_value(value)))


@secret_app.command("get")
def secret_get(key: str = typer.Argument(..., help="Secret name")) -> None:
    typer.echo(_run(lambda: Sdk().get_secret(key)))


@secret_app.command("set")
def secret_set(
    key: str = typer.Argument(..., help="Secret name"),
    value: str = typer.Argument(..., help="Secret value"),
) -> None:
    stored = _run(lambda: Sdk().set_secret(key, value))
    typer.echo(f"Stored secret {stored}")


@app.command()
def track(
    event: str = typer.Argument(..., help="Event name"),
    tags: list[str] = typer.Option([], "-t", "--tag", help="Event tag (repeatable)"),
    meta: list[str] = typer.Option(
        [], "-m", "--meta", help="Metadata as key=value (repeatable)"
    ),
) -> None:
    """Send an analytics event. Delivery failures are ignored."""
    metadata = _run(lambda: parse_metadata(meta))
    _run(lambda: Sdk().track(tags, event, metadata))
