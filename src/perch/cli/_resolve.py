"""``perch resolve``: run one URL through the router and emit the body.

The outcome and mime type go to stderr so stdout carries only the
resource bytes.
"""

import argparse
import logging
import sys
from pathlib import Path

import anyio

from perch.bundle import MemoryBundle
from perch.config import FrontendConfig
from perch.errors import PerchError
from perch.router import ResourceRouter


def run_resolve(args: argparse.Namespace) -> None:
    """Resolve ``args.url`` and write the body.

    Exits with status 1 when the resolution has no body, and with status 2
    on configuration errors.
    """
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        bundle = MemoryBundle.from_directory(args.bundle) if args.bundle else MemoryBundle()
        config = FrontendConfig(
            custom_frontend=args.custom_frontend,
            bundled_path=args.bundled_path,
        )
    except (OSError, PerchError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    router = ResourceRouter(bundle, config)
    resolution = anyio.run(router.resolve, args.url)

    print(f"{resolution.outcome.value} {resolution.mime_type}", file=sys.stderr)
    if resolution.body is None:
        raise SystemExit(1)

    if args.output:
        Path(args.output).write_bytes(resolution.body)
    else:
        sys.stdout.buffer.write(resolution.body)
        sys.stdout.buffer.flush()
