"""Typer CLI definition for ttsproxy."""

import asyncio
import logging
import sys
from pathlib import Path

import typer

from .cache import get_cache_dir
from .cache.storage import CacheStore
from .config import CONFIG_PATH, generate_config, load_config
from .core import speak_text
from .provider.errors import ProviderStatusError, ProviderTransportError

app = typer.Typer(help="Text-to-speech proxy with a client-side response cache")
config_app = typer.Typer(help="Manage the configuration file")
cache_app = typer.Typer(help="Inspect the local response store")
app.add_typer(config_app, name="config")
app.add_typer(cache_app, name="cache")


def configure_logging(debug: bool) -> None:
    """Configure root logging for a CLI entry point."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def process_text_input(text: str | None) -> str:
    """Return the text to request, read from stdin when not given.

    Raises:
        ValueError: If no text is provided
    """
    if text is None and not sys.stdin.isatty():
        text = sys.stdin.read().strip()

    if not text:
        raise ValueError("No text provided")

    return text


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (from config if omitted)"),
    port: int | None = typer.Option(None, "--port", help="Listening port (PORT env or config if omitted)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Run the TTS proxy server."""
    from .server.app import serve as run_server

    configure_logging(debug)
    run_server(host=host, port=port, debug=debug)


@app.command()
def fetch(
    text: str | None = typer.Argument(None, help="Text to convert to speech"),
    output: Path | None = typer.Option(
        None, "-o", "--output", help="Save audio to file instead of playing"
    ),
    base_url: str | None = typer.Option(
        None, "--base-url", help="Proxy root URL (from config if omitted)"
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the local response store"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose errors and cache activity"),
) -> None:
    """Fetch audio for TEXT through the proxy and play or save it."""
    configure_logging(debug)

    try:
        request_text = process_text_input(text)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    try:
        asyncio.run(
            speak_text(
                request_text,
                output_file=str(output) if output else None,
                cache=not no_cache,
                base_url=base_url,
            )
        )
        if output:
            typer.echo(f"Audio saved to {output}")

    except ProviderStatusError as e:
        if debug:
            typer.echo(f"Debug - Proxy error: {e!r}", err=True)
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except ProviderTransportError as e:
        if debug:
            typer.echo(f"Debug - Connection error: {e!r}", err=True)
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        if debug:
            typer.echo(f"Debug - File system error: {e!r}", err=True)
        else:
            typer.echo(f"Error: Failed to save audio file: {e}", err=True)
        raise typer.Exit(1) from None
    except RuntimeError as e:
        if debug:
            typer.echo(f"Debug - Audio playback error: {e!r}", err=True)
        else:
            typer.echo(f"Error: Failed to play audio: {e}", err=True)
        raise typer.Exit(1) from None


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write the default configuration file."""
    if CONFIG_PATH.exists() and not force:
        typer.echo(f"Config already exists at {CONFIG_PATH} (use --force to overwrite)", err=True)
        raise typer.Exit(1)

    path = generate_config()
    typer.echo(f"Wrote {path}")


@cache_app.command("list")
def cache_list() -> None:
    """List the requests held in the configured store."""
    config = load_config()
    store = CacheStore(config.cache.path or get_cache_dir(), config.cache.store)

    keys = store.keys()
    typer.echo(f"=== {store.name} ({len(keys)} entries) ===")
    for method, url in keys:
        typer.echo(f"{method} {url}")
