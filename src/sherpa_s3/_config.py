"""Configuration model and the credentials file on disk."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Final

from sherpa_s3._errors import ConfigCreated, ConfigError

log = logging.getLogger(__name__)

APP_NAME: Final = "sherpa-s3"
CONFIG_FILENAME: Final = "config.toml"

PLACEHOLDER_ACCESS_KEY_ID: Final = "YOUR_ACCESS_KEY_ID"
PLACEHOLDER_SECRET_ACCESS_KEY: Final = "YOUR_SECRET_ACCESS_KEY"
DEFAULT_REGION: Final = "us-east-1"

PLACEHOLDER_TEMPLATE: Final = f"""\
access_key_id = "{PLACEHOLDER_ACCESS_KEY_ID}"
secret_access_key = "{PLACEHOLDER_SECRET_ACCESS_KEY}"
region = "{DEFAULT_REGION}"

# For S3-compatible services, uncomment and set the endpoint URL:
# endpoint_url = "s3.us-east-001.compatible-service.com"
"""


@dataclasses.dataclass(frozen=True)
class Config:
    """Credentials and connection settings.

    :param access_key_id: Access key ID.
    :param secret_access_key: Secret access key.
    :param region: Region name.
    :param endpoint_url: Optional endpoint for S3-compatible services.
    """

    access_key_id: str
    secret_access_key: str
    region: str
    endpoint_url: str | None = None

    def __repr__(self) -> str:
        return (
            f"Config(access_key_id={self.access_key_id!r}, secret_access_key='***', "
            f"region={self.region!r}, endpoint_url={self.endpoint_url!r})"
        )

    @property
    def is_placeholder(self) -> bool:
        """``True`` while the credentials are the generated placeholders."""
        return (
            self.access_key_id == PLACEHOLDER_ACCESS_KEY_ID
            or self.secret_access_key == PLACEHOLDER_SECRET_ACCESS_KEY
        )

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Config:
        """Construct from a plain dict (e.g. parsed TOML).

        An ``endpoint_url`` without a scheme gets ``https://`` prepended.

        :raises ValueError: If a required key is missing or a value is not a string.
        """
        values: dict[str, str] = {}
        for name in ("access_key_id", "secret_access_key", "region"):
            if name not in data:
                raise ValueError(f"missing required key '{name}'")
            value = data[name]
            if not isinstance(value, str):
                raise ValueError(f"'{name}' must be a string")
            values[name] = value

        endpoint_url = data.get("endpoint_url")
        if endpoint_url is not None:
            if not isinstance(endpoint_url, str):
                raise ValueError("'endpoint_url' must be a string")
            if "://" not in endpoint_url:
                endpoint_url = f"https://{endpoint_url}"

        return cls(endpoint_url=endpoint_url or None, **values)


def user_config_dir() -> Path:
    """Per-user configuration directory of the platform (not app-specific)."""
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home())))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def default_config_path() -> Path:
    """``{platform config dir}/sherpa-s3/config.toml``."""
    return user_config_dir() / APP_NAME / CONFIG_FILENAME


def write_placeholder(path: Path) -> None:
    """Write a placeholder configuration file, creating parent directories.

    :raises ConfigError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(PLACEHOLDER_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Could not save the new configuration file '{path}'", path=str(path), cause=exc
        ) from exc


def load_config(path: Path) -> Config:
    """Read and validate the configuration file at ``path``.

    :raises FileNotFoundError: If the file does not exist.
    :raises ConfigError: If the file is unreadable, malformed, or still a placeholder.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Error loading configuration '{path}'", path=str(path), cause=exc) from exc

    try:
        config = Config.from_dict(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration '{path}'", path=str(path), cause=exc) from exc

    if config.is_placeholder:
        raise ConfigError(
            f"Configuration '{path}' still contains placeholder credentials. "
            "Please edit it with your S3 credentials before proceeding.",
            path=str(path),
        )
    return config


def load_or_create(path: Path | None = None) -> Config:
    """Load the configuration, writing a placeholder file when none exists.

    :param path: Config file location. Defaults to :func:`default_config_path`.
    :raises ConfigCreated: If the file was missing and a placeholder was written.
    :raises ConfigError: If the file is invalid.
    """
    path = path or default_config_path()
    try:
        config = load_config(path)
    except FileNotFoundError:
        log.info("No configuration file found at %s. Creating a default one.", path)
        write_placeholder(path)
        raise ConfigCreated(
            f"Default configuration file created at '{path}'. "
            "Please edit it with your S3 credentials before proceeding.",
            path=str(path),
        ) from None

    log.info("Successfully loaded configuration from %s", path)
    log.debug("Current configuration: %r", config)
    return config
