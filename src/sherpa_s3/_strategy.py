"""Transfer strategy selection."""

from __future__ import annotations

import dataclasses
import enum

from sherpa_s3._errors import NoRemoteEndpoint
from sherpa_s3._locator import Endpoint, is_remote, parse_endpoint


class TransferStrategy(enum.Enum):
    """Direction and mechanism of a single transfer."""

    REMOTE_TO_REMOTE = "remote_to_remote"
    UPLOAD = "upload"
    DOWNLOAD = "download"


_STRATEGIES: dict[tuple[bool, bool], TransferStrategy] = {
    (True, True): TransferStrategy.REMOTE_TO_REMOTE,
    (False, True): TransferStrategy.UPLOAD,
    (True, False): TransferStrategy.DOWNLOAD,
}


def select_strategy(source_is_remote: bool, destination_is_remote: bool) -> TransferStrategy:
    """Pick the strategy for a (source, destination) classification pair.

    :raises NoRemoteEndpoint: If both sides are local.
    """
    try:
        return _STRATEGIES[(source_is_remote, destination_is_remote)]
    except KeyError:
        raise NoRemoteEndpoint(
            "Invalid arguments: at least one of source or destination must be an S3 path."
        ) from None


@dataclasses.dataclass(frozen=True)
class TransferPlan:
    """A validated transfer, ready to execute.

    :param strategy: The selected strategy.
    :param source: Parsed source endpoint.
    :param destination: Parsed destination endpoint.
    """

    strategy: TransferStrategy
    source: Endpoint
    destination: Endpoint


def plan_transfer(source: str, destination: str) -> TransferPlan:
    """Parse both descriptors and select a strategy. Performs no I/O.

    :raises MalformedRemoteLocator: If either remote descriptor is malformed.
    :raises NoRemoteEndpoint: If both descriptors are local paths.
    """
    src = parse_endpoint(source)
    dst = parse_endpoint(destination)
    strategy = select_strategy(is_remote(src), is_remote(dst))
    return TransferPlan(strategy=strategy, source=src, destination=dst)
