"""Command handlers. Each takes an explicit :class:`Context`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sherpa_s3._errors import DeletionFailed, ListingFailed, StorageError
from sherpa_s3._locator import RemoteLocator
from sherpa_s3._transfer import execute

if TYPE_CHECKING:
    from sherpa_s3._context import Context
    from sherpa_s3._strategy import TransferPlan

log = logging.getLogger(__name__)


def list_buckets(ctx: Context) -> list[str]:
    """Names of all buckets.

    :raises ListingFailed: If the listing request fails.
    """
    log.info("Listing buckets")
    try:
        return ctx.client.list_buckets()
    except StorageError as exc:
        raise ListingFailed("Could not list S3 buckets", cause=exc) from exc


def list_objects(ctx: Context, bucket: str) -> list[str]:
    """Keys in ``bucket``.

    :raises ListingFailed: If the bucket is missing or the listing request fails.
    """
    log.info("Listing objects in bucket %s", bucket)
    try:
        return ctx.client.list_objects(bucket)
    except StorageError as exc:
        raise ListingFailed(f"Could not list objects in bucket '{bucket}'", cause=exc) from exc


def transfer(ctx: Context, plan: TransferPlan) -> None:
    """Execute a planned copy between one object or file pair."""
    execute(ctx.client, plan)


def remove_object(ctx: Context, bucket: str, key: str) -> None:
    """Delete one object. Never prompts.

    :raises MalformedRemoteLocator: If ``bucket`` or ``key`` is empty.
    :raises DeletionFailed: If the delete request fails.
    """
    locator = RemoteLocator(bucket=bucket, key=key)
    log.info("Deleting object %s", locator)
    try:
        ctx.client.delete_object(locator)
    except StorageError as exc:
        raise DeletionFailed(f"Could not delete object '{key}' from bucket '{bucket}'", cause=exc) from exc


def remove_bucket(ctx: Context, bucket: str) -> None:
    """Delete a bucket. Confirmation is the caller's concern.

    :raises DeletionFailed: If the delete request fails.
    """
    log.info("Deleting bucket %s", bucket)
    try:
        ctx.client.delete_bucket(bucket)
    except StorageError as exc:
        raise DeletionFailed(f"Could not delete bucket '{bucket}'", cause=exc) from exc
