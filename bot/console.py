"""
Console
Owns the registry and wires resolver, executor and dispatcher together
"""

from typing import Optional

from bot.config import Config
from commands.builtin import BuiltinCommands
from commands.command import Command
from commands.command_registry import CommandRegistry
from commands.dispatcher import InboundDispatcher
from commands.executor import CommandExecutor, CommandResult
from commands.permission import CONSOLE, ExactUserPermission
from commands.resolver import CommandResolver
from commands.sender import ConsoleCommandSender
from events.event_bus import EventBus
from utils.error_handler import ErrorHandler
from utils.logger import LoggerMixin, set_default_level
from utils.monitoring import Monitoring


class Console(LoggerMixin):
    """One console process: its commands, its event bus, its dispatcher."""

    def __init__(self, config: Optional[Config] = None, bus: Optional[EventBus] = None):
        self.config = config or Config.from_env()
        self.config.validate()
        set_default_level(self.config.log_level)
        super().__init__("Console")

        prefix = self.config.COMMAND_PREFIX
        self.error_handler = ErrorHandler()
        self.monitoring = Monitoring()
        self.registry = CommandRegistry(prefix)
        self.resolver = CommandResolver(self.registry, prefix)
        self.executor = CommandExecutor()
        self.bus = bus or EventBus(self.error_handler)
        self.dispatcher = InboundDispatcher(
            self.resolver,
            self.executor,
            error_handler=self.error_handler,
            monitoring=self.monitoring,
            check_permission=self.config.CHECK_PERMISSION,
            reply_on_failure=self.config.REPLY_ON_FAILURE,
        )
        self.sender = ConsoleCommandSender()
        self.default_permission = CONSOLE | ExactUserPermission.of(self.config.OPERATOR_IDS)
        self.builtins = BuiltinCommands(self.registry, self.resolver, self.monitoring, self.default_permission)
        self.running = False

    def register_command(self, command: Command, require_prefix: Optional[bool] = None) -> Command:
        """Bind a command's names; later registrations of a name win."""
        self.registry.register(command, require_prefix)
        return command

    def unregister_command(self, command: Command) -> bool:
        return self.registry.unregister(command)

    def match_command(self, raw_token: str) -> Optional[Command]:
        """Exact resolution of a user-typed token."""
        return self.resolver.resolve(raw_token)

    async def start(self) -> None:
        """Register built-ins and start dispatching message events."""
        if self.running:
            return
        self.error_handler.start()
        self.builtins.register_all()
        self.dispatcher.subscribe(self.bus)
        self.running = True
        self.success(f"Console started with {len(self.registry)} commands (prefix {self.config.COMMAND_PREFIX!r})")

    async def stop(self) -> None:
        """Stop dispatching and wait for events already posted."""
        if not self.running:
            return
        self.info("Shutting down console...")
        self.dispatcher.unsubscribe()
        await self.bus.drain()
        self.builtins.unregister_all()
        await self.error_handler.shutdown()
        self.running = False

    async def execute_console_line(self, line: str) -> Optional[CommandResult]:
        """
        Run a line typed by the console operator.

        Returns:
            CommandResult, or None if the line named no command
        """
        result = await self.dispatcher.execute_message(self.sender, line, self.config.CHECK_PERMISSION)
        if result is None:
            self.warning(f"Unknown command: {line.strip()!r}")
        elif not result.ok:
            await self.dispatcher.report_failure(self.sender, result.error)
        return result

    async def __aenter__(self) -> "Console":
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.stop()
