"""Quickstart - upload, copy and download with sherpa-s3 as a library.

Demonstrates:
- Building a Config and a Context explicitly
- Uploading a local file, copying it server-side, downloading it back

Point ``ENDPOINT`` at an S3-compatible server (e.g. MinIO or
``moto_server``) with a bucket named ``demo``.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from sherpa_s3 import Config, Context, copy

ENDPOINT = "http://127.0.0.1:5000"

if __name__ == "__main__":
    config = Config(
        access_key_id="testing",
        secret_access_key="testing",
        region="us-east-1",
        endpoint_url=ENDPOINT,
    )

    with tempfile.TemporaryDirectory() as tmp, Context(config) as ctx:
        src = Path(tmp) / "hello.txt"
        src.write_bytes(b"Hello, world!")

        plan = copy(ctx.client, str(src), "s3://demo/hello.txt")
        print(f"{plan.strategy.value}: {plan.source} -> {plan.destination}")

        plan = copy(ctx.client, "s3://demo/hello.txt", "s3://demo/copy/hello.txt")
        print(f"{plan.strategy.value}: {plan.source} -> {plan.destination}")

        out = Path(tmp) / "back.txt"
        plan = copy(ctx.client, "s3://demo/copy/hello.txt", str(out))
        print(f"{plan.strategy.value}: {plan.source} -> {plan.destination}")
        print(f"Content: {out.read_bytes()!r}")
