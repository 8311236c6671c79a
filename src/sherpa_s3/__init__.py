"""Copy, list and delete objects in S3-compatible storage."""

from sherpa_s3._client import StorageClient
from sherpa_s3._config import Config, default_config_path, load_or_create
from sherpa_s3._context import Context
from sherpa_s3._errors import (
    BackendUnavailable,
    ConfigCreated,
    ConfigError,
    DeletionFailed,
    ErrorKind,
    ListingFailed,
    LocalReadFailed,
    LocalWriteFailed,
    MalformedRemoteLocator,
    NoRemoteEndpoint,
    NotFound,
    PermissionDenied,
    RemoteCopyFailed,
    RemoteReadFailed,
    RemoteWriteFailed,
    SherpaError,
    StorageError,
    TransferFailed,
)
from sherpa_s3._locator import LocalLocator, RemoteLocator, is_remote, parse_endpoint, parse_remote
from sherpa_s3._strategy import TransferPlan, TransferStrategy, plan_transfer, select_strategy
from sherpa_s3._transfer import copy, execute

__version__ = "0.1.0"

__all__ = [
    # Transfer core
    "copy",
    "execute",
    "plan_transfer",
    "select_strategy",
    "TransferPlan",
    "TransferStrategy",
    # Locators
    "parse_endpoint",
    "parse_remote",
    "is_remote",
    "RemoteLocator",
    "LocalLocator",
    # Client & config
    "StorageClient",
    "Context",
    "Config",
    "default_config_path",
    "load_or_create",
    # Errors
    "ErrorKind",
    "SherpaError",
    "MalformedRemoteLocator",
    "NoRemoteEndpoint",
    "TransferFailed",
    "RemoteCopyFailed",
    "RemoteWriteFailed",
    "RemoteReadFailed",
    "LocalReadFailed",
    "LocalWriteFailed",
    "ListingFailed",
    "DeletionFailed",
    "ConfigError",
    "ConfigCreated",
    "StorageError",
    "NotFound",
    "PermissionDenied",
    "BackendUnavailable",
    # Version
    "__version__",
]
