from __future__ import annotations

import argparse
import logging
import sys
import uuid

import uvicorn

from rea_api.api.http_app import SERVICE_NAME, build_app
from rea_api.logging_setup import configure_logging
from rea_api.services.bootstrap import build_runtime_container
from rea_api.settings import runtime_settings_from_env


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Registered email address API")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument(
        "--dry-run-startup",
        action="store_true",
        help="Validate startup and exit",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable code reload (dev mode)",
    )
    return parser.parse_args(argv)


def create_runtime_app() -> object:
    settings = runtime_settings_from_env()
    configure_logging(settings.log_level)
    container = build_runtime_container(settings)
    return build_app(
        run_id=str(uuid.uuid4()),
        api_deps=container.api_deps,
        on_startup=container.on_startup,
        on_shutdown=container.on_shutdown,
    )


def run(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = runtime_settings_from_env()

    if args.port is not None and args.port <= 0:
        sys.stderr.write(f"ERROR: invalid port {args.port}\n")
        return 2

    configure_logging(settings.log_level)
    run_id = str(uuid.uuid4())
    logger = logging.getLogger("runtime")

    logger.info(
        "runtime initialized",
        extra={"service": SERVICE_NAME, "run_id": run_id},
    )

    container = build_runtime_container(settings)

    if args.dry_run_startup:
        logger.info(
            "dry-run startup complete",
            extra={"service": SERVICE_NAME, "run_id": run_id},
        )
        return 0

    host = args.host or settings.host
    port = args.port if args.port is not None else settings.port
    if args.reload:
        uvicorn.run(
            "rea_api.main:create_runtime_app",
            host=host,
            port=port,
            log_level="warning",
            reload=True,
            factory=True,
        )
    else:
        app = build_app(
            run_id=run_id,
            api_deps=container.api_deps,
            on_startup=container.on_startup,
            on_shutdown=container.on_shutdown,
        )
        uvicorn.run(app, host=host, port=port, log_level="warning")
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
