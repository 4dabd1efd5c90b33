"""Entry point for running ctoai as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the ctoai CLI application."""
    app()


if __name__ == "__main__":
    main()
