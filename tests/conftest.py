"""Shared test fixtures and marker registration."""

from __future__ import annotations

import io
import socket
import uuid
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock
from urllib.parse import urlsplit

import pytest

from sherpa_s3._client import StorageClient
from sherpa_s3._config import Config
from sherpa_s3._context import Context

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

REGION = "us-east-1"


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: requires a moto S3 server")


def _s3_available() -> bool:
    try:
        import boto3  # noqa: F401
        import moto  # noqa: F401
        import s3fs  # noqa: F401

        return True
    except ImportError:
        return False


def _free_port() -> int:
    with socket.socket() as s:
        s.bind(("", 0))
        return s.getsockname()[1]


@pytest.fixture(scope="session")
def moto_server() -> Iterator[str]:
    """Start a moto HTTP server for the test session.

    Uses server mode instead of mock_aws() to avoid Python 3.13
    PEP 667 f_locals incompatibility with s3fs/aiobotocore.
    """
    if not _s3_available():
        pytest.skip("moto/s3fs/boto3 not installed")
    from moto.moto_server.threaded_moto_server import ThreadedMotoServer

    port = _free_port()
    server = ThreadedMotoServer(port=port, verbose=False)
    server.start()
    yield f"http://127.0.0.1:{port}"
    server.stop()


@pytest.fixture()
def s3(moto_server: str) -> Any:
    """A boto3 client for arranging and inspecting moto state."""
    import boto3

    return boto3.client(
        "s3",
        endpoint_url=moto_server,
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name=REGION,
    )


@pytest.fixture()
def bucket(s3: Any) -> str:
    """A fresh, empty bucket."""
    name = f"test-{uuid.uuid4().hex[:8]}"
    s3.create_bucket(Bucket=name)
    return name


@pytest.fixture()
def storage(moto_server: str) -> Iterator[StorageClient]:
    """A StorageClient talking to the moto server."""
    client = StorageClient(
        key="testing",
        secret="testing",
        region_name=REGION,
        endpoint_url=moto_server,
    )
    yield client
    client.close()


@pytest.fixture()
def moto_config(moto_server: str) -> Config:
    return Config(
        access_key_id="testing",
        secret_access_key="testing",
        region=REGION,
        endpoint_url=moto_server,
    )


class FakeBody:
    """Async streaming body like the one ``get_object`` returns through s3fs.

    Serves ``data`` in reads of at most ``amt`` bytes, then raises
    ``fail_with`` (if given) instead of signalling the end of the body.
    """

    def __init__(self, data: bytes = b"", *, fail_with: BaseException | None = None) -> None:
        self._buffer = io.BytesIO(data)
        self._fail_with = fail_with
        self.closed = False

    async def read(self, amt: int | None = None) -> bytes:
        chunk = self._buffer.read(amt)
        if not chunk and self._fail_with is not None:
            raise self._fail_with
        return chunk

    def close(self) -> None:
        self.closed = True


_DEFAULT_RESPONSES: dict[str, Callable[..., dict[str, Any]]] = {
    "get_object": lambda **kwargs: {"Body": FakeBody()},
    "list_buckets": lambda **kwargs: {"Buckets": []},
    "list_objects_v2": lambda **kwargs: {"KeyCount": 0, "IsTruncated": False},
}


@pytest.fixture()
def fake_fs() -> MagicMock:
    """Stand-in for ``s3fs.S3FileSystem`` that records every ``call_s3``.

    ``fs.responses`` maps an S3 method name to a callable building its
    response from the call's keyword arguments.
    """
    from fsspec.asyn import get_loop

    fs = MagicMock(name="S3FileSystem")
    fs.loop = get_loop()
    fs.responses = dict(_DEFAULT_RESPONSES)
    fs.call_s3.side_effect = lambda method, **kwargs: fs.responses.get(method, lambda **kw: {})(**kwargs)
    return fs


@pytest.fixture()
def serve_object(fake_fs: MagicMock) -> Callable[..., FakeBody]:
    """Make the fake's ``get_object`` return a body with the given content."""

    def serve(data: bytes = b"", *, fail_with: BaseException | None = None) -> FakeBody:
        body = FakeBody(data, fail_with=fail_with)
        fake_fs.responses["get_object"] = lambda **kwargs: {"Body": body}
        return body

    return serve


@pytest.fixture()
def fake_client(fake_fs: MagicMock) -> StorageClient:
    return StorageClient(filesystem=fake_fs)


@pytest.fixture()
def fake_context(fake_client: StorageClient) -> Context:
    cfg = Config(access_key_id="AKIA", secret_access_key="secret", region=REGION)
    return Context(cfg, client=fake_client)


@pytest.fixture()
def sent_requests(storage: StorageClient) -> list[tuple[str, str]]:
    """``(method, path)`` of every HTTP request ``storage`` sends from now on.

    Recorded with a ``before-send`` hook on the botocore client s3fs uses.
    """
    from fsspec.asyn import sync

    fs = storage._fs
    s3_client = sync(fs.loop, fs.set_session)
    sent: list[tuple[str, str]] = []

    def record(request: Any, **kwargs: Any) -> None:
        parts = urlsplit(request.url)
        sent.append((request.method, f"{parts.path}?{parts.query}" if parts.query else parts.path))

    s3_client.meta.events.register("before-send.s3", record)
    return sent
