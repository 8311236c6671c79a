"""Error handling - branching on ErrorKind instead of message text.

Demonstrates the closed error taxonomy: descriptor errors are raised
before any I/O, transfer failures carry the underlying cause.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from sherpa_s3 import (
    Config,
    Context,
    ErrorKind,
    LocalReadFailed,
    SherpaError,
    copy,
)

if __name__ == "__main__":
    config = Config(
        access_key_id="testing",
        secret_access_key="testing",
        region="us-east-1",
        endpoint_url="http://127.0.0.1:5000",
    )

    with tempfile.TemporaryDirectory() as tmp, Context(config) as ctx:
        missing = str(Path(tmp) / "missing.bin")

        # --- Rejected before any I/O ---
        for source, destination in [("./a", "./b"), ("s3://bucket-only", "./b"), ("s3://b/", "./b")]:
            try:
                copy(ctx.client, source, destination)
            except SherpaError as exc:
                print(f"{exc.kind.name}: {exc}")

        # --- Local read failure, with an explicit not-found signal ---
        try:
            copy(ctx.client, missing, "s3://demo/key")
        except LocalReadFailed as exc:
            print(f"\n{exc.kind.name}: not_found={exc.not_found}, path={exc.path}")

        # --- Branch on the kind ---
        try:
            copy(ctx.client, "s3://demo/does-not-exist", str(Path(tmp) / "out"))
        except SherpaError as exc:
            if exc.kind is ErrorKind.REMOTE_READ_FAILED:
                print(f"\nRemote read failed ({type(exc.cause).__name__}): {exc.cause}")
            else:
                raise
