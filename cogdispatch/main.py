"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import signal
from pathlib import Path
from typing import Sequence

from .chat_adapters.slack_adapter import SlackAdapter
from .core import CommandDispatcher, CommandRegistry, Config, ConfigError, Router, load_config
from .core.commands import register_builtin_commands
from .core.config import resolve_config_dir
from .core.router import permissions_from_mapping

LOGGER = logging.getLogger(__name__)


def cli(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="cogdispatch",
        description="cogdispatch - prefix command bot for Slack",
    )
    parser.add_argument(
        "--config-dir",
        help="Directory containing .env and bot.yaml (default: ~/.cogdispatch)",
    )
    args = parser.parse_args(argv)

    try:
        asyncio.run(_run_async(args.config_dir))
    except ConfigError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.info("Interrupted by user")
        return 130
    return 0


def build_dispatcher(config: Config, adapter: SlackAdapter) -> CommandDispatcher:
    registry = CommandRegistry()
    register_builtin_commands(registry, config.prefix, adapter.reply)
    return CommandDispatcher(config.prefix, registry, adapter.reply)


async def _run_async(config_dir: str | Path | None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    resolved_dir = resolve_config_dir(config_dir)
    LOGGER.info("Using config directory: %s", resolved_dir)

    config = load_config(resolved_dir)

    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    logging.getLogger().setLevel(log_level)

    slack_adapter = SlackAdapter(
        bot_token=config.slack_bot_token,
        app_token=config.slack_app_token,
        allowed_user_ids=config.slack_allowed_user_ids,
    )
    slack_adapter.bind_router(
        Router(
            build_dispatcher(config, slack_adapter),
            permissions_for=permissions_from_mapping(config.permissions),
        )
    )

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _request_shutdown() -> None:
        LOGGER.info("Shutdown requested")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _request_shutdown)
        except NotImplementedError:
            # Windows event loops before 3.11 do not support signal handlers.
            pass

    slack_task = asyncio.create_task(slack_adapter.start())
    LOGGER.info("cogdispatch bot started with prefix %r", config.prefix)

    await stop_event.wait()
    await slack_adapter.stop()
    await slack_task
    LOGGER.info("Shutdown complete")


if __name__ == "__main__":
    raise SystemExit(cli())
