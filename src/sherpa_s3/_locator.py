"""Endpoint locators and the descriptor parser."""

from __future__ import annotations

import dataclasses
from typing import Final, Union

from sherpa_s3._errors import MalformedRemoteLocator

SCHEME: Final = "s3://"


@dataclasses.dataclass(frozen=True)
class RemoteLocator:
    """An object in the storage service.

    :param bucket: Bucket name (non-empty).
    :param key: Object key within the bucket (non-empty, may contain ``/``).
    :raises MalformedRemoteLocator: If either field is empty.
    """

    bucket: str
    key: str

    def __post_init__(self) -> None:
        if not self.bucket or not self.key:
            raise MalformedRemoteLocator(
                "Bucket and key cannot be empty.",
                descriptor=f"{SCHEME}{self.bucket}/{self.key}",
            )

    @property
    def path(self) -> str:
        """``bucket/key``, the form used as a copy source."""
        return f"{self.bucket}/{self.key}"

    def __str__(self) -> str:
        return f"{SCHEME}{self.path}"


@dataclasses.dataclass(frozen=True)
class LocalLocator:
    """A local filesystem path, validated only when it is opened.

    :param path: The path exactly as given.
    """

    path: str

    def __str__(self) -> str:
        return self.path


Endpoint = Union[RemoteLocator, LocalLocator]


def is_remote(endpoint: Endpoint) -> bool:
    """Return ``True`` if ``endpoint`` refers to the storage service."""
    return isinstance(endpoint, RemoteLocator)


def parse_remote(descriptor: str) -> RemoteLocator:
    """Parse an ``s3://bucket/key`` descriptor.

    Only the first ``/`` after the bucket is significant.

    :raises MalformedRemoteLocator: If the scheme is missing, there is no
        ``/`` after the bucket, or bucket or key is empty.
    """
    if not descriptor.startswith(SCHEME):
        raise MalformedRemoteLocator(f"S3 path must start with '{SCHEME}'", descriptor=descriptor)
    bucket, sep, key = descriptor[len(SCHEME) :].partition("/")
    if not sep:
        raise MalformedRemoteLocator(
            "S3 path must include a bucket and a key separated by a '/'",
            descriptor=descriptor,
        )
    if not bucket or not key:
        raise MalformedRemoteLocator("Bucket and key cannot be empty.", descriptor=descriptor)
    return RemoteLocator(bucket=bucket, key=key)


def parse_endpoint(descriptor: str) -> Endpoint:
    """Classify a descriptor as remote or local.

    Anything without the ``s3://`` prefix is a local path, whatever it
    looks like.

    :raises MalformedRemoteLocator: If the descriptor is remote but malformed.
    """
    if descriptor.startswith(SCHEME):
        return parse_remote(descriptor)
    return LocalLocator(descriptor)
