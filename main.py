"""
Entry point for the command console.
"""

import asyncio
import sys

from bot.client import run_client
from utils.logger import get_logger

logger = get_logger("Main")


def main():
    """Main entry point."""
    try:
        logger.info("Starting command console...")
        asyncio.run(run_client())
    except KeyboardInterrupt:
        logger.info("Console stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
