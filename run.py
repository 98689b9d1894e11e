# run.py
import sys
import os
import uvicorn
import argparse
import logging

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.config import CONFIG_PATH_ENV, get_config_manager, ConfigManager
from core.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the infergate inference gateway.")
    parser.add_argument("--config", type=str, default=None,
                        help=f"Path to the YAML configuration file (sets ${CONFIG_PATH_ENV}).")
    parser.add_argument("--prod", action="store_true",
                        help="Production mode: worker processes, no auto-reload.")
    parser.add_argument("--host", type=str, default=None, help="Bind address, overrides server.host.")
    parser.add_argument("--port", type=int, default=None, help="Bind port, overrides server.port.")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker processes in --prod mode, overrides server.workers.")
    parser.add_argument("--log-level", type=str, default=None,
                        choices=["critical", "error", "warning", "info", "debug"],
                        help="Uvicorn log level, overrides server.log_level.")
    return parser


def warn_if_unconfigured(config: ConfigManager, logger: logging.Logger):
    # Requests still reach the gateway, they are answered with a 500 envelope
    if not config.get_api_key():
        logger.warning("No API key configured; every inference request will be rejected as misconfigured.")
    if not config.get_config("backend.type"):
        logger.warning("No inference backend configured; every inference request will be rejected as misconfigured.")


def main():
    args = build_parser().parse_args()
    if args.config:
        # Worker processes re-import main:app and read the path from the environment
        os.environ[CONFIG_PATH_ENV] = args.config

    config: ConfigManager = get_config_manager(args.config)
    setup_logging(config)
    logger = logging.getLogger(f"infergate.{__name__}")
    warn_if_unconfigured(config, logger)

    host = args.host if args.host is not None else config.get_config("server.host", "127.0.0.1")
    port = args.port if args.port is not None else config.get_config("server.port", 8000)
    log_level = args.log_level or str(config.get_config("server.log_level", "info")).lower()

    run_config = {"app": "main:app", "host": host, "port": port, "log_level": log_level}

    if args.prod:
        workers = args.workers if args.workers is not None else config.get_config("server.workers", 1)
        run_config.update(workers=max(1, workers), reload=False)
        logger.info(f"Starting gateway (production) on {host}:{port} with {run_config['workers']} worker(s).")
    else:
        run_config.update(workers=1, reload=True, reload_dirs=[".", "core", "api", "schemas", "utils"])
        logger.info(f"Starting gateway (development) on {host}:{port} with auto-reload.")

    uvicorn.run(**run_config)

if __name__ == "__main__":
    main()
