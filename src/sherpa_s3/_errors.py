"""Closed error taxonomy for sherpa_s3."""

from __future__ import annotations

import enum
from typing import ClassVar, Optional


class ErrorKind(enum.Enum):
    """Every way an invocation can fail."""

    MALFORMED_LOCATOR = "malformed_locator"
    NO_REMOTE_ENDPOINT = "no_remote_endpoint"
    REMOTE_COPY_FAILED = "remote_copy_failed"
    REMOTE_WRITE_FAILED = "remote_write_failed"
    REMOTE_READ_FAILED = "remote_read_failed"
    LOCAL_READ_FAILED = "local_read_failed"
    LOCAL_WRITE_FAILED = "local_write_failed"
    LISTING_FAILED = "listing_failed"
    DELETION_FAILED = "deletion_failed"
    CONFIG_INVALID = "config_invalid"
    CONFIG_CREATED = "config_created"
    STORAGE = "storage"


class SherpaError(Exception):
    """Base class for all sherpa_s3 errors.

    :param message: Human-readable error description.
    :param cause: The underlying error, if any. Its message is appended
        verbatim to ``str(error)``.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str = "", *, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is None:
            return message
        return f"{message}: {self.cause}" if message else str(self.cause)

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__())]
        if self.cause is not None:
            args.append(f"cause={self.cause!r}")
        return f"{cls}({', '.join(args)})"


class MalformedRemoteLocator(SherpaError):
    """Raised when an ``s3://`` descriptor lacks a valid ``bucket/key`` split.

    :param descriptor: The offending descriptor.
    """

    kind = ErrorKind.MALFORMED_LOCATOR

    def __init__(self, message: str = "", *, descriptor: str = "") -> None:
        self.descriptor = descriptor
        super().__init__(message)


class NoRemoteEndpoint(SherpaError):
    """Raised when neither transfer endpoint references the storage service."""

    kind = ErrorKind.NO_REMOTE_ENDPOINT


# region: transfer failures


class TransferFailed(SherpaError):
    """Base class for failures while executing a transfer."""


class RemoteCopyFailed(TransferFailed):
    """The service rejected or failed a server-side copy."""

    kind = ErrorKind.REMOTE_COPY_FAILED


class RemoteWriteFailed(TransferFailed):
    """The service rejected or failed a put."""

    kind = ErrorKind.REMOTE_WRITE_FAILED


class RemoteReadFailed(TransferFailed):
    """The service rejected or failed a get, or the body stream broke."""

    kind = ErrorKind.REMOTE_READ_FAILED


class LocalTransferFailed(TransferFailed):
    """Base class for filesystem failures on the local side of a transfer.

    :param path: The local path involved.
    """

    def __init__(self, message: str = "", *, path: str = "", cause: Optional[BaseException] = None) -> None:
        self.path = path
        super().__init__(message, cause=cause)

    @property
    def not_found(self) -> bool:
        """``True`` when the local path (or its parent directory) does not exist."""
        return isinstance(self.cause, FileNotFoundError)


class LocalReadFailed(LocalTransferFailed):
    """Opening or reading the local source failed."""

    kind = ErrorKind.LOCAL_READ_FAILED


class LocalWriteFailed(LocalTransferFailed):
    """Creating or writing the local destination failed."""

    kind = ErrorKind.LOCAL_WRITE_FAILED


# endregion

# region: command failures


class ListingFailed(SherpaError):
    """Listing buckets or objects failed."""

    kind = ErrorKind.LISTING_FAILED


class DeletionFailed(SherpaError):
    """Deleting an object or bucket failed."""

    kind = ErrorKind.DELETION_FAILED


class ConfigError(SherpaError):
    """The configuration file is unreadable, malformed, or still a placeholder.

    :param path: The configuration file path.
    """

    kind = ErrorKind.CONFIG_INVALID

    def __init__(self, message: str = "", *, path: str = "", cause: Optional[BaseException] = None) -> None:
        self.path = path
        super().__init__(message, cause=cause)


class ConfigCreated(ConfigError):
    """A placeholder configuration file was just written; the user must edit it."""

    kind = ErrorKind.CONFIG_CREATED


# endregion

# region: storage client failures


class StorageError(SherpaError):
    """Normalized failure reported by the storage service.

    The message is the service's own message, unmodified.

    :param path: The ``bucket/key`` path involved, if any.
    """

    kind = ErrorKind.STORAGE

    def __init__(self, message: str = "", *, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)


class NotFound(StorageError):
    """Raised when a bucket or object does not exist."""


class PermissionDenied(StorageError):
    """Raised when the service denies access."""


class BackendUnavailable(StorageError):
    """Raised when the service cannot be reached."""


# endregion
