"""Entry point for running ttsproxy as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the ttsproxy CLI application."""
    app()


if __name__ == "__main__":
    main()
