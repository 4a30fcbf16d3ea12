"""
plusplus.bot.__main__ — Entry point for ``python -m plusplus.bot``
==================================================================

Wiring:
1. Load .env (secrets).
2. Configure logging (``DEBUG`` env var → debug level).
3. Load config.yaml + environment overrides.
4. Create the configured point store (SQLite or DynamoDB).
5. Create the PlusPlusBot and hand it the store.
6. Run the Socket Mode loop (blocks until Ctrl+C or SIGTERM).

Run with::

    python -m plusplus.bot
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from plusplus.bot.core import PlusPlusBot
from plusplus.config import load_config
from plusplus.errors import StoreError
from plusplus.store.factory import create_point_store

logger = logging.getLogger("plusplus")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> None:
    """Bootstrap and run the PlusPlus bot."""

    # 1. Environment variables (secrets).
    load_dotenv()

    # 2. Logging.
    _configure_logging(bool(os.getenv("DEBUG")))

    # 3. Configuration.
    try:
        cfg = load_config(os.getenv("PLUSPLUS_CONFIG", "config.yaml"))
    except ValueError as exc:
        logger.critical("Invalid configuration: %s", exc)
        sys.exit(1)
    if cfg.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    logger.info("Config loaded — store: %s", cfg.store_type)

    # 4. Point store.
    try:
        store = create_point_store(cfg)
    except (ValueError, StoreError) as exc:
        logger.critical("Failed to create point store: %s", exc)
        sys.exit(1)

    # 5. Bot.
    try:
        bot = PlusPlusBot(
            os.getenv("SLACK_BOT_TOKEN", ""),
            os.getenv("SLACK_APP_TOKEN", ""),
            store,
            verbose=cfg.debug,
        )
    except ValueError as exc:
        logger.critical("Failed to create bot: %s", exc)
        store.close()
        sys.exit(1)

    # 6. Run.
    try:
        asyncio.run(bot.start())
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
