"""Tests for the per-invocation Context."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from sherpa_s3._client import StorageClient
from sherpa_s3._config import Config
from sherpa_s3._context import Context
from sherpa_s3._errors import ConfigCreated

if TYPE_CHECKING:
    from unittest.mock import MagicMock


def test_builds_client_from_config() -> None:
    cfg = Config(access_key_id="a", secret_access_key="s", region="eu-central-1", endpoint_url="http://minio:9000")
    ctx = Context(cfg)
    assert isinstance(ctx.client, StorageClient)
    assert "eu-central-1" in repr(ctx.client)
    assert "http://minio:9000" in repr(ctx.client)


def test_explicit_client_kept(fake_client: StorageClient) -> None:
    cfg = Config(access_key_id="a", secret_access_key="s", region="r")
    assert Context(cfg, client=fake_client).client is fake_client


def test_context_manager_closes_client(fake_client: StorageClient, fake_fs: MagicMock) -> None:
    cfg = Config(access_key_id="a", secret_access_key="s", region="r")
    with Context(cfg, client=fake_client):
        pass
    fake_fs.clear_instance_cache.assert_called_once_with()


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('access_key_id = "a"\nsecret_access_key = "s"\nregion = "r"\n')
    ctx = Context.load(path)
    assert ctx.config == Config(access_key_id="a", secret_access_key="s", region="r")


def test_load_creates_placeholder(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    with pytest.raises(ConfigCreated):
        Context.load(path)
    assert path.exists()
