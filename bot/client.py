"""
Discord transport for the console using discord.py-self.
Every inbound message becomes a MessageEvent on the console's bus.
"""

import asyncio
import signal
from typing import Optional

import discord

from bot.config import Config, config
from bot.console import Console
from commands.sender import as_command_sender
from events.message_event import MessageEvent
from utils.logger import get_logger

logger = get_logger("Client")


class ConsoleClient(discord.Client):
    """Discord client feeding messages to a console."""

    def __init__(self, console: Console, **options):
        super().__init__(**options)
        self.console = console

    async def setup_hook(self) -> None:
        """Called when the client is starting up."""
        await self.console.start()

    async def on_ready(self) -> None:
        logger.info(f"Logged in as: {self.user}")
        logger.info(f"Use {self.console.config.COMMAND_PREFIX}help to see available commands")

    async def on_message(self, message: discord.Message) -> None:
        """Post the message to the bus; each one is handled on its own task."""
        # Self-bot: only the account owner issues commands unless configured otherwise
        if self.console.config.OWNER_ONLY and (self.user is None or message.author.id != self.user.id):
            self.console.monitoring.record_message()
            return
        event = MessageEvent(as_command_sender(message), message.content, source=message)
        self.console.bus.post(event)

    async def close(self) -> None:
        """Clean shutdown."""
        logger.info("Shutting down client...")
        await self.console.stop()
        await super().close()


def create_client(cfg: Optional[Config] = None) -> ConsoleClient:
    """Create a console and a client bound to it."""
    return ConsoleClient(Console(cfg or config))


async def run_client(cfg: Optional[Config] = None) -> None:
    """Run the client until it is closed."""
    cfg = cfg or config
    cfg.validate(require_token=True)

    client = create_client(cfg)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, lambda s=sig: asyncio.create_task(_shutdown(client, s)))
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    try:
        await client.start(cfg.DISCORD_TOKEN)
    except Exception as e:
        logger.error(f"Client error: {e}")
        raise


async def _shutdown(client: ConsoleClient, sig: signal.Signals) -> None:
    logger.info(f"Received {sig.name}, shutting down...")
    await client.close()
