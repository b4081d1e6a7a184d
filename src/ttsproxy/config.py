"""Configuration management for ttsproxy.

Loads configuration from ~/.config/ttsproxy/config.toml when present.
Priority chain: CLI flags > env vars > config file > built-in defaults.
"""

import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

CONFIG_DIR = Path.home() / ".config" / "ttsproxy"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_PORT = 3010
DEFAULT_ORIGIN = "https://hindi-help.apps.atom-ops.ca"
DEFAULT_STORE = "hindi-audio-cache-v1"

DEFAULT_CONFIG = f"""\
# ttsproxy configuration

[server]
# Bind address for the proxy
host = "0.0.0.0"

# Listening port (the PORT environment variable takes precedence)
port = {DEFAULT_PORT}

# The single origin allowed to call the proxy from a browser
allowed_origin = "{DEFAULT_ORIGIN}"

[provider]
# Language and client parameters sent to the provider
language = "hi"
client = "tw-ob"

# Outbound timeout in seconds (leave unset to wait indefinitely)
# timeout = 30

[cache]
# Name of the response store used by `ttsproxy fetch`
store = "{DEFAULT_STORE}"

# Proxy used by `ttsproxy fetch`
base_url = "http://localhost:{DEFAULT_PORT}"

# Cache location (defaults to ~/.cache/ttsproxy)
# path = "~/.cache/ttsproxy"
"""


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""

    host: str
    port: int
    allowed_origin: str


@dataclass(frozen=True)
class ProviderConfig:
    """Outbound provider configuration."""

    language: str
    client: str
    timeout: float | None


@dataclass(frozen=True)
class CacheConfig:
    """Client-side response cache configuration."""

    store: str
    path: Path | None
    base_url: str


@dataclass(frozen=True)
class ProxyConfig:
    """Top-level ttsproxy configuration."""

    server: ServerConfig
    provider: ProviderConfig
    cache: CacheConfig


_cached_config: ProxyConfig | None = None


def default_config() -> ProxyConfig:
    """Build the configuration used when no file or env vars are present."""
    return ProxyConfig(
        server=ServerConfig(host="0.0.0.0", port=DEFAULT_PORT, allowed_origin=DEFAULT_ORIGIN),
        provider=ProviderConfig(language="hi", client="tw-ob", timeout=None),
        cache=CacheConfig(
            store=DEFAULT_STORE,
            path=None,
            base_url=f"http://localhost:{DEFAULT_PORT}",
        ),
    )


def generate_config() -> Path:
    """Generate default config file at ~/.config/ttsproxy/config.toml."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(DEFAULT_CONFIG)
    return CONFIG_PATH


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    print(f"Edit {CONFIG_PATH} or delete it to regenerate.", file=sys.stderr)
    raise SystemExit(1)


def _parse_port(value: object) -> int:
    try:
        port = int(str(value))
    except ValueError:
        _fail(f"Invalid port: {value!r}")
    if not 0 < port < 65536:
        _fail(f"Port out of range: {port}")
    return port


def _parse_timeout(value: object) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(str(value))
    except ValueError:
        _fail(f"Invalid provider timeout: {value!r}")


def load_config(reload: bool = False) -> ProxyConfig:
    """Load configuration from config file with env var overrides.

    A missing config file is not an error; defaults apply so the server
    can start with nothing but PORT set.

    Args:
        reload: Ignore the cached result and read the file again.

    Returns:
        Loaded and validated ProxyConfig.

    Raises:
        SystemExit: If the config file or an env override is invalid.
    """
    global _cached_config
    if _cached_config is not None and not reload:
        return _cached_config

    data: dict = {}
    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            _fail(f"Invalid config file {CONFIG_PATH}: {e}")

    defaults = default_config()
    server = data.get("server", {})
    provider = data.get("provider", {})
    cache = data.get("cache", {})

    # Env vars override config file values
    port = os.getenv("PORT") or server.get("port", defaults.server.port)
    timeout = os.getenv("TTSPROXY_PROVIDER_TIMEOUT", provider.get("timeout"))
    cache_path = os.getenv("TTSPROXY_CACHE_DIR", cache.get("path"))

    _cached_config = ProxyConfig(
        server=ServerConfig(
            host=os.getenv("TTSPROXY_HOST", server.get("host", defaults.server.host)),
            port=_parse_port(port),
            allowed_origin=os.getenv(
                "TTSPROXY_ALLOWED_ORIGIN",
                server.get("allowed_origin", defaults.server.allowed_origin),
            ),
        ),
        provider=ProviderConfig(
            language=provider.get("language", defaults.provider.language),
            client=provider.get("client", defaults.provider.client),
            timeout=_parse_timeout(timeout),
        ),
        cache=CacheConfig(
            store=cache.get("store", defaults.cache.store),
            path=Path(cache_path).expanduser() if cache_path else None,
            base_url=os.getenv(
                "TTSPROXY_BASE_URL", cache.get("base_url", defaults.cache.base_url)
            ),
        ),
    )

    return _cached_config
