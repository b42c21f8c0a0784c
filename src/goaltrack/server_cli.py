"""CLI entry point for the goaltrack API server."""

import argparse
import os

from goaltrack.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goaltrack-server",
        description="goaltrack API server for goals, milestones and tasks",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind host (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart on source changes")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: console log output instead of JSON lines",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # The environment variable reaches reload workers, which import settings afresh
    if args.local:
        os.environ["GOALTRACK_LOCAL_MODE"] = "1"
        settings.local_mode = True

    import uvicorn

    uvicorn.run(
        "goaltrack.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
