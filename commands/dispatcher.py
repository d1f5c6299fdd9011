"""
Inbound Dispatcher
Routes message events to commands and reports their failures
"""

from typing import Any, Optional

from commands.executor import CommandExecutionError, CommandExecutor, CommandResult, FailureKind
from commands.resolver import CommandResolver
from commands.sender import CommandSender
from events.event_bus import ConcurrencyKind, EventBus, EventPriority, Listener
from events.message_event import MessageEvent, flatten_command_components
from utils.error_handler import ErrorHandler
from utils.logger import get_logger
from utils.monitoring import Monitoring


class InboundDispatcher:
    """Subscribes to message events and executes the commands they name."""

    def __init__(
        self,
        resolver: CommandResolver,
        executor: CommandExecutor,
        error_handler: Optional[ErrorHandler] = None,
        monitoring: Optional[Monitoring] = None,
        check_permission: bool = True,
        reply_on_failure: bool = True,
    ):
        self.logger = get_logger("Dispatcher")
        self.resolver = resolver
        self.executor = executor
        self.error_handler = error_handler or ErrorHandler()
        self.monitoring = monitoring
        self.check_permission = check_permission
        self.reply_on_failure = reply_on_failure
        self.listener: Optional[Listener] = None

    def subscribe(self, bus: EventBus) -> Listener:
        """Listen for message events, concurrently and ahead of normal listeners."""
        if self.listener is not None and self.listener.active:
            return self.listener
        self.listener = bus.subscribe(
            MessageEvent,
            self.handle,
            concurrency=ConcurrencyKind.CONCURRENT,
            priority=EventPriority.HIGH,
        )
        return self.listener

    def unsubscribe(self) -> None:
        """Stop dispatching new events. Running commands are not interrupted."""
        if self.listener is not None:
            self.listener.complete()
            self.listener = None

    async def handle(self, event: MessageEvent) -> bool:
        """
        Handle one message event.

        Args:
            event: Inbound message

        Returns:
            True if a command ran (the event is consumed), False if the
            message named no command
        """
        if self.monitoring:
            self.monitoring.record_message()

        result = await self.execute_message(event.sender, event.message, self.check_permission)
        if result is None:
            return False

        if not result.ok:
            await self.report_failure(event.sender, result.error)
        return True

    async def execute_message(
        self,
        sender: CommandSender,
        message: Any,
        check_permission: bool = True,
    ) -> Optional[CommandResult]:
        """
        Resolve the first component of ``message`` and execute it.

        Returns:
            CommandResult, or None if no command matched
        """
        components = flatten_command_components(message)
        if not components or not isinstance(components[0], str):
            return None

        command_name = components[0]
        cmd = self.resolver.resolve(command_name)
        if cmd is None:
            return None

        result = await self.executor.execute(sender, cmd, command_name, components[1:], check_permission)
        if self.monitoring:
            self.monitoring.record_command()
        return result

    async def report_failure(self, sender: CommandSender, error: CommandExecutionError) -> None:
        """Log a failed execution and tell the sender about it."""
        if error.kind is FailureKind.PERMISSION_DENIED:
            self.logger.info(f"{sender.name} is not allowed to run {error.command_name}")
            if self.monitoring:
                self.monitoring.record_permission_denied()
        else:
            self.error_handler.handle_exception(error, error.command.name)
            if self.monitoring:
                self.monitoring.record_failure()

        if self.reply_on_failure:
            await sender.send_message(format_failure(error))


def format_failure(error: CommandExecutionError) -> str:
    """User-facing text for a failed command."""
    if error.kind is FailureKind.PERMISSION_DENIED:
        return f"❌ You don't have permission to use `{error.command_name}`"
    return f"❌ Command `{error.command_name}` failed: {error.cause}"
