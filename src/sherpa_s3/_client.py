"""Storage client for S3-compatible services using s3fs."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from sherpa_s3._errors import (
    BackendUnavailable,
    NotFound,
    PermissionDenied,
    SherpaError,
    StorageError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from sherpa_s3._config import Config
    from sherpa_s3._locator import RemoteLocator

log = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

# S3 error codes; HEAD responses carry only the HTTP status as the code.
_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "NotFound", "404"})
_DENIED_CODES = frozenset(
    {"AccessDenied", "AllAccessDisabled", "InvalidAccessKeyId", "SignatureDoesNotMatch", "403"}
)


def _message(exc: BaseException) -> str:
    """The exception's own text, or its chained cause's when s3fs raises a bare ``OSError``."""
    return str(exc) or str(exc.__cause__ or "")


class StorageClient:
    """Authenticated handle on an S3-compatible service.

    No network call is made until the first operation.

    :param key: Access key ID.
    :param secret: Secret access key.
    :param region_name: Region name.
    :param endpoint_url: Custom endpoint URL for S3-compatible services.
    :param filesystem: Pre-built ``s3fs.S3FileSystem`` (or compatible
        object) to use instead of constructing one.
    """

    def __init__(
        self,
        *,
        key: str | None = None,
        secret: str | None = None,
        region_name: str | None = None,
        endpoint_url: str | None = None,
        filesystem: Any = None,
    ) -> None:
        self._key = key
        self._secret = secret
        self._region_name = region_name
        self._endpoint_url = endpoint_url
        self._fs_instance: Any = filesystem

    @classmethod
    def from_config(cls, config: Config) -> StorageClient:
        """Build a client from a loaded configuration."""
        return cls(
            key=config.access_key_id,
            secret=config.secret_access_key,
            region_name=config.region,
            endpoint_url=config.endpoint_url,
        )

    def __repr__(self) -> str:
        return f"StorageClient(region_name={self._region_name!r}, endpoint_url={self._endpoint_url!r})"

    # region: lazy filesystem

    @property
    def _fs(self) -> Any:
        if self._fs_instance is None:
            import s3fs  # type: ignore[import-untyped]

            opts: dict[str, Any] = {"anon": False}
            if self._endpoint_url is not None:
                opts["endpoint_url"] = self._endpoint_url
            if self._key is not None:
                opts["key"] = self._key
            if self._secret is not None:
                opts["secret"] = self._secret
            if self._region_name is not None:
                opts["client_kwargs"] = {"region_name": self._region_name}
            log.debug("Creating S3 file system (endpoint_url=%s)", self._endpoint_url)
            self._fs_instance = s3fs.S3FileSystem(**opts)
        return self._fs_instance

    # endregion

    # region: error mapping

    @contextmanager
    def _errors(self, path: str = "") -> Iterator[None]:
        """Map s3fs/botocore exceptions to storage errors, keeping the service message."""
        try:
            yield
        except SherpaError:
            raise
        except FileNotFoundError as exc:
            raise NotFound(_message(exc) or f"Not found: {path}", path=path) from exc
        except PermissionError as exc:
            raise PermissionDenied(_message(exc) or f"Permission denied: {path}", path=path) from exc
        except Exception as exc:
            raise self._classify_error(exc, path) from exc

    @staticmethod
    def _classify_error(exc: Exception, path: str) -> StorageError:
        """Classify an unknown exception into a storage error type.

        s3fs translates a botocore ``ClientError`` into an ``OSError`` and
        chains the original as ``__cause__``; its error code decides the type.
        """
        from botocore.exceptions import ClientError, ConnectTimeoutError, EndpointConnectionError

        text = _message(exc) or type(exc).__name__
        client_error = exc if isinstance(exc, ClientError) else exc.__cause__
        if isinstance(client_error, ClientError):
            code = client_error.response.get("Error", {}).get("Code", "")
            if code in _NOT_FOUND_CODES:
                return NotFound(text, path=path)
            if code in _DENIED_CODES:
                return PermissionDenied(text, path=path)
            return StorageError(text, path=path)
        if isinstance(exc, (EndpointConnectionError, ConnectTimeoutError, ConnectionError, TimeoutError)):
            return BackendUnavailable(text, path=path)
        return StorageError(text, path=path)

    # endregion

    # region: listing

    def list_buckets(self) -> list[str]:
        """Return the names of all buckets visible to these credentials."""
        with self._errors():
            response = self._fs.call_s3("list_buckets")
        return [entry["Name"] for entry in response.get("Buckets", [])]

    def list_objects(self, bucket: str) -> list[str]:
        """Return every key in ``bucket``, following continuation tokens.

        :raises NotFound: If the bucket does not exist.
        """
        keys: list[str] = []
        params: dict[str, str] = {"Bucket": bucket}
        with self._errors(bucket):
            while True:
                page = self._fs.call_s3("list_objects_v2", **params)
                keys.extend(entry["Key"] for entry in page.get("Contents", []))
                if not page.get("IsTruncated"):
                    break
                params["ContinuationToken"] = page["NextContinuationToken"]
        return keys

    # endregion

    # region: object transfer

    def copy_object(self, source: RemoteLocator, destination: RemoteLocator) -> None:
        """Server-side copy of ``source`` to ``destination`` in one request."""
        with self._errors(source.path):
            self._fs.call_s3(
                "copy_object",
                Bucket=destination.bucket,
                Key=destination.key,
                CopySource={"Bucket": source.bucket, "Key": source.key},
            )

    def put_object(self, destination: RemoteLocator, body: bytes) -> None:
        """Write ``body`` as the whole content of ``destination`` in one request."""
        with self._errors(destination.path):
            self._fs.call_s3("put_object", Bucket=destination.bucket, Key=destination.key, Body=body)

    def open_object(self, source: RemoteLocator) -> ObjectStream:
        """Issue the get for ``source`` and return its body as a stream.

        The response headers have arrived when this returns; the body is
        pulled by :meth:`ObjectStream.iter_chunks`.

        :raises NotFound: If the bucket or object does not exist.
        """
        with self._errors(source.path):
            response = self._fs.call_s3("get_object", Bucket=source.bucket, Key=source.key)
        return ObjectStream(self, response["Body"], source.path)

    def _read_body(self, body: Any, size: int) -> bytes:
        """Read up to ``size`` bytes from an async response body on the file system's loop."""
        from fsspec.asyn import sync

        data: bytes = sync(self._fs.loop, body.read, size)
        return data

    # endregion

    # region: deletion

    def delete_object(self, locator: RemoteLocator) -> None:
        """Delete a single object."""
        with self._errors(locator.path):
            self._fs.call_s3("delete_object", Bucket=locator.bucket, Key=locator.key)

    def delete_bucket(self, bucket: str) -> None:
        """Delete a bucket."""
        with self._errors(bucket):
            self._fs.call_s3("delete_bucket", Bucket=bucket)

    # endregion

    # region: lifecycle

    def close(self) -> None:
        """Drop the underlying file system and its cached connections."""
        if self._fs_instance is not None:
            self._fs_instance.clear_instance_cache()
            self._fs_instance = None

    def __enter__(self) -> StorageClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # endregion


class ObjectStream:
    """Body of one ``get_object`` response, pulled in chunks.

    :param client: The client whose loop and error mapping apply to reads.
    :param body: The response's streaming body.
    :param path: ``bucket/key`` of the object.
    """

    def __init__(self, client: StorageClient, body: Any, path: str) -> None:
        self._client = client
        self._body = body
        self._path = path

    def iter_chunks(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the body in arrival order until it is exhausted."""
        while True:
            with self._client._errors(self._path):
                chunk = self._client._read_body(self._body, chunk_size)
            if not chunk:
                return
            yield chunk

    def close(self) -> None:
        self._body.close()

    def __enter__(self) -> ObjectStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
