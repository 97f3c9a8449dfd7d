"""
Geco entry point

    python -m geco [--config PATH] [--host HOST] [--port PORT]

Loads configuration, configures the logger and serves the HTTP API.
"""

import sys

# Logged names may hold lone surrogates; escape them instead of failing the write
if hasattr(sys.stdout, 'reconfigure'):
    sys.stdout.reconfigure(encoding='utf-8', errors='backslashreplace')  # type: ignore
if hasattr(sys.stderr, 'reconfigure'):
    sys.stderr.reconfigure(encoding='utf-8', errors='backslashreplace')  # type: ignore

import argparse
from typing import List, Optional

import uvicorn

from geco.api.main import create_app
from geco.managers import ConfigManager
from geco.models.enums import LogCategory
from geco.services.service_container import ServiceContainer
from geco.utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="geco", description="Geco animation API server")
    parser.add_argument("--config", help="Path to config.yaml (default: packaged config)")
    parser.add_argument("--host", help="Override api.host")
    parser.add_argument("--port", type=int, help="Override api.port")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    config = ConfigManager(config_path=args.config).load()
    configure_logger(config.logging.level, use_colors=config.logging.use_colors)

    services = ServiceContainer.build(config)
    app = create_app(config.api, services)

    host = args.host or config.api.host
    port = args.port or config.api.port
    log.info("Starting API server", host=host, port=port)

    uvicorn.run(app, host=host, port=port, log_level="warning")


if __name__ == "__main__":
    main()
