"""Tests for strategy selection and transfer planning."""

from __future__ import annotations

import pytest

from sherpa_s3._errors import ErrorKind, MalformedRemoteLocator, NoRemoteEndpoint
from sherpa_s3._locator import LocalLocator, RemoteLocator
from sherpa_s3._strategy import TransferStrategy, plan_transfer, select_strategy


class TestSelectStrategy:
    @pytest.mark.parametrize(
        ("source_is_remote", "destination_is_remote", "expected"),
        [
            (True, True, TransferStrategy.REMOTE_TO_REMOTE),
            (False, True, TransferStrategy.UPLOAD),
            (True, False, TransferStrategy.DOWNLOAD),
        ],
    )
    def test_table(self, source_is_remote: bool, destination_is_remote: bool, expected: TransferStrategy) -> None:
        assert select_strategy(source_is_remote, destination_is_remote) is expected

    def test_both_local_rejected(self) -> None:
        with pytest.raises(NoRemoteEndpoint, match="at least one of source or destination") as exc_info:
            select_strategy(False, False)
        assert exc_info.value.kind is ErrorKind.NO_REMOTE_ENDPOINT


class TestPlanTransfer:
    def test_remote_to_remote(self) -> None:
        plan = plan_transfer("s3://src-bucket/a.txt", "s3://dst-bucket/b.txt")
        assert plan.strategy is TransferStrategy.REMOTE_TO_REMOTE
        assert plan.source == RemoteLocator("src-bucket", "a.txt")
        assert plan.destination == RemoteLocator("dst-bucket", "b.txt")

    def test_upload(self) -> None:
        plan = plan_transfer("./local.bin", "s3://dst/key.bin")
        assert plan.strategy is TransferStrategy.UPLOAD
        assert plan.source == LocalLocator("./local.bin")
        assert plan.destination == RemoteLocator("dst", "key.bin")

    def test_download(self) -> None:
        plan = plan_transfer("s3://src/key.bin", "./out.bin")
        assert plan.strategy is TransferStrategy.DOWNLOAD
        assert plan.source == RemoteLocator("src", "key.bin")
        assert plan.destination == LocalLocator("./out.bin")

    def test_both_local(self) -> None:
        with pytest.raises(NoRemoteEndpoint):
            plan_transfer("./a", "./b")

    def test_malformed_destination_with_local_source(self) -> None:
        with pytest.raises(MalformedRemoteLocator):
            plan_transfer("./a", "s3://bucket-only")

    def test_malformed_source_with_local_destination(self) -> None:
        with pytest.raises(MalformedRemoteLocator):
            plan_transfer("s3:///key", "./b")
