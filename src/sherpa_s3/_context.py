"""Per-invocation context handed to every command handler."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sherpa_s3._client import StorageClient
from sherpa_s3._config import load_or_create

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from sherpa_s3._config import Config


class Context:
    """Owns the configuration and storage client for one invocation.

    :param config: Loaded configuration.
    :param client: Storage client. Built from ``config`` when omitted.
    """

    def __init__(self, config: Config, client: StorageClient | None = None) -> None:
        self.config = config
        self.client = client or StorageClient.from_config(config)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Context:
        """Load (or create) the configuration file and build a context from it.

        :raises ConfigCreated: If a placeholder file had to be written.
        :raises ConfigError: If the file is invalid.
        """
        return cls(load_or_create(config_path))

    def __repr__(self) -> str:
        return f"Context(config={self.config!r}, client={self.client!r})"

    def close(self) -> None:
        """Release the storage client."""
        self.client.close()

    def __enter__(self) -> Context:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
