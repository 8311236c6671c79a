"""Transfer executor: runs exactly one strategy per invocation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sherpa_s3._client import CHUNK_SIZE
from sherpa_s3._errors import (
    LocalReadFailed,
    LocalWriteFailed,
    RemoteCopyFailed,
    RemoteReadFailed,
    RemoteWriteFailed,
    StorageError,
)
from sherpa_s3._locator import LocalLocator, RemoteLocator
from sherpa_s3._strategy import TransferPlan, TransferStrategy, plan_transfer

if TYPE_CHECKING:
    from sherpa_s3._client import StorageClient

log = logging.getLogger(__name__)


def copy_remote(client: StorageClient, source: RemoteLocator, destination: RemoteLocator) -> None:
    """Server-side copy of one object.

    :raises RemoteCopyFailed: If the service rejects or fails the copy.
    """
    log.info("Copying %s to %s", source, destination)
    try:
        client.copy_object(source, destination)
    except StorageError as exc:
        raise RemoteCopyFailed(f"Could not copy '{source}' to '{destination}'", cause=exc) from exc
    log.info("Copied %s to %s", source, destination)


def upload(client: StorageClient, source: LocalLocator, destination: RemoteLocator) -> None:
    """Read a local file whole, then put it as one object.

    The file is buffered in memory; nothing is sent if reading fails.

    :raises LocalReadFailed: If the file cannot be opened or read.
    :raises RemoteWriteFailed: If the service rejects or fails the put.
    """
    log.info("Reading local file %s", source)
    try:
        with open(source.path, "rb") as f:
            body = f.read()
    except OSError as exc:
        raise LocalReadFailed(f"Could not read local file '{source}'", path=source.path, cause=exc) from exc
    log.info("Read %d bytes from %s", len(body), source)

    log.info("Uploading to %s", destination)
    try:
        client.put_object(destination, body)
    except StorageError as exc:
        raise RemoteWriteFailed(f"Could not upload to '{destination}'", cause=exc) from exc
    log.info("Uploaded %s to %s", source, destination)


def download(
    client: StorageClient,
    source: RemoteLocator,
    destination: LocalLocator,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> None:
    """Stream one object into a local file, chunk by chunk.

    The remote read is issued before the local file is created, so a
    missing object leaves the destination untouched. A failure after the
    first chunk leaves a partial file behind.

    :raises RemoteReadFailed: If the get fails or the body stream breaks.
    :raises LocalWriteFailed: If the file cannot be created or written.
    """
    log.info("Requesting %s", source)
    try:
        stream = client.open_object(source)
    except StorageError as exc:
        raise RemoteReadFailed(f"Could not read '{source}'", cause=exc) from exc

    with stream:
        try:
            f = open(destination.path, "wb")  # noqa: SIM115
        except OSError as exc:
            raise LocalWriteFailed(
                f"Could not create local file '{destination}'", path=destination.path, cause=exc
            ) from exc
        with f:
            chunks = stream.iter_chunks(chunk_size)
            written = 0
            while True:
                try:
                    chunk = next(chunks, None)
                except StorageError as exc:
                    raise RemoteReadFailed(f"Could not read '{source}'", cause=exc) from exc
                if chunk is None:
                    break
                try:
                    f.write(chunk)
                except OSError as exc:
                    raise LocalWriteFailed(
                        f"Could not write local file '{destination}'", path=destination.path, cause=exc
                    ) from exc
                written += len(chunk)
                log.debug("Wrote %d bytes to %s", written, destination)
    log.info("Downloaded %s to %s (%d bytes)", source, destination, written)


def execute(client: StorageClient, plan: TransferPlan) -> None:
    """Run the branch selected by ``plan``.

    :raises TypeError: If the plan's endpoints do not fit its strategy.
    """
    src, dst = plan.source, plan.destination
    if plan.strategy is TransferStrategy.REMOTE_TO_REMOTE:
        if isinstance(src, RemoteLocator) and isinstance(dst, RemoteLocator):
            copy_remote(client, src, dst)
            return
    elif plan.strategy is TransferStrategy.UPLOAD:
        if isinstance(src, LocalLocator) and isinstance(dst, RemoteLocator):
            upload(client, src, dst)
            return
    elif plan.strategy is TransferStrategy.DOWNLOAD:
        if isinstance(src, RemoteLocator) and isinstance(dst, LocalLocator):
            download(client, src, dst)
            return
    msg = f"Endpoints of {plan!r} do not fit strategy {plan.strategy.value}"
    raise TypeError(msg)


def copy(client: StorageClient, source: str, destination: str) -> TransferPlan:
    """Plan and execute a transfer between two descriptors.

    :returns: The executed plan.
    :raises MalformedRemoteLocator: Before any I/O, for a bad ``s3://`` descriptor.
    :raises NoRemoteEndpoint: Before any I/O, if both sides are local.
    :raises TransferFailed: If the selected branch fails.
    """
    plan = plan_transfer(source, destination)
    log.debug("Selected %s for %s -> %s", plan.strategy.value, source, destination)
    execute(client, plan)
    return plan
