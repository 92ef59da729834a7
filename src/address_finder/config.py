"""Environment-based configuration.

Settings are read from environment variables. A local `.env` file can fill
in missing variables:
- If `ADDRESS_FINDER_ENV_FILE` is set, load that file.
- Otherwise try `.env` in the current working directory.

Real environment variables always win; `.env` only fills missing ones.

Variables
---------
- GOOGLE_MAPS_API_KEY (optional; lookups fail with a configuration error without it)
- ADDRESS_FINDER_DISTANCE_MATRIX_URL (default: Google's JSON endpoint)
- ADDRESS_FINDER_HTTP_TIMEOUT (seconds, default: 10)
- ADDRESS_FINDER_MAX_ADDRESSES (default: 20)
- ADDRESS_FINDER_MAX_INPUT_CHARS (default: 20000)
- ADDRESS_FINDER_LOG_LEVEL (default: INFO)
- ADDRESS_FINDER_API_HOST / ADDRESS_FINDER_API_PORT (default: 0.0.0.0 / 8000)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .distance import DEFAULT_BASE_URL, DistanceMatrixClient
from .service import DEFAULT_MAX_ADDRESSES

DEFAULT_MAX_INPUT_CHARS = 20_000
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000


def _parse_env_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    value = value.strip()

    # Remove simple quotes.
    if value.startswith(('"', "'")) and value.endswith(('"', "'")) and len(value) >= 2:
        value = value[1:-1]

    if not key:
        return None
    return key, value


def load_dotenv_if_present(path: str | Path | None = None) -> Path | None:
    """Fill missing environment variables from a `.env` file.

    Returns:
        The file that was loaded, or None if there was none.
    """
    if path is None:
        explicit = os.getenv("ADDRESS_FINDER_ENV_FILE")
        path = Path(explicit).expanduser() if explicit else Path.cwd() / ".env"

    env_path = Path(path)
    if not env_path.is_file():
        return None

    for raw in env_path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_env_line(raw)
        if parsed is None:
            continue
        key, value = parsed
        if key in os.environ:
            continue
        os.environ[key] = value

    return env_path


def _get_env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _get_env_float(name: str, default: float) -> float:
    """Read an environment variable as float with a default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid float env var {name}={raw!r}") from e


def _get_env_int(name: str, default: int) -> int:
    """Read an environment variable as int with a default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid int env var {name}={raw!r}") from e


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by the API and the CLI."""

    google_maps_api_key: str | None = None
    distance_matrix_url: str = DEFAULT_BASE_URL
    http_timeout: float = 10.0
    max_addresses: int = DEFAULT_MAX_ADDRESSES
    max_input_chars: int = DEFAULT_MAX_INPUT_CHARS
    log_level: str = "INFO"
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT

    @classmethod
    def from_env(cls, *, load_dotenv: bool = True) -> "Settings":
        """Build settings from the environment (and `.env`, unless disabled)."""
        if load_dotenv:
            load_dotenv_if_present()

        settings = cls(
            google_maps_api_key=_get_env_str("GOOGLE_MAPS_API_KEY"),
            distance_matrix_url=_get_env_str(
                "ADDRESS_FINDER_DISTANCE_MATRIX_URL", DEFAULT_BASE_URL
            )
            or DEFAULT_BASE_URL,
            http_timeout=_get_env_float("ADDRESS_FINDER_HTTP_TIMEOUT", 10.0),
            max_addresses=_get_env_int(
                "ADDRESS_FINDER_MAX_ADDRESSES", DEFAULT_MAX_ADDRESSES
            ),
            max_input_chars=_get_env_int(
                "ADDRESS_FINDER_MAX_INPUT_CHARS", DEFAULT_MAX_INPUT_CHARS
            ),
            log_level=(_get_env_str("ADDRESS_FINDER_LOG_LEVEL", "INFO") or "INFO").upper(),
            api_host=_get_env_str("ADDRESS_FINDER_API_HOST", DEFAULT_API_HOST)
            or DEFAULT_API_HOST,
            api_port=_get_env_int("ADDRESS_FINDER_API_PORT", DEFAULT_API_PORT),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.http_timeout <= 0:
            raise RuntimeError("ADDRESS_FINDER_HTTP_TIMEOUT must be > 0")
        if self.max_addresses < 1:
            raise RuntimeError("ADDRESS_FINDER_MAX_ADDRESSES must be >= 1")
        if self.max_input_chars < 1:
            raise RuntimeError("ADDRESS_FINDER_MAX_INPUT_CHARS must be >= 1")
        if not (1 <= self.api_port <= 65535):
            raise RuntimeError("ADDRESS_FINDER_API_PORT must be in range [1, 65535]")

    def distance_client(self) -> DistanceMatrixClient | None:
        """Build a distance client, or None when no API key is configured."""
        if not self.google_maps_api_key:
            return None
        return DistanceMatrixClient(
            self.google_maps_api_key,
            base_url=self.distance_matrix_url,
            timeout=self.http_timeout,
        )


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once and quiet chatty third-party loggers."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
