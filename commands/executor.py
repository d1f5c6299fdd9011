"""
Command Executor
Permission gate, invocation and failure normalization
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from commands.command import Command
from commands.sender import CommandSender
from utils.logger import get_logger


class FailureKind(Enum):
    PERMISSION_DENIED = "permission_denied"
    HANDLER_FAILURE = "handler_failure"


class CommandPermissionDeniedError(Exception):
    """The sender failed the command's permission predicate."""

    def __init__(self, command: Command, sender: Optional[CommandSender] = None):
        self.command = command
        self.sender = sender
        who = f" for {sender.name}" if sender is not None else ""
        super().__init__(f"Permission denied{who}: {command.name}")


class CommandExecutionError(Exception):
    """
    The single failure shape of command execution.

    Attributes:
        command: Command that was being executed
        command_name: Name the user typed to reach it
        cause: Original exception (also chained as ``__cause__``)
    """

    def __init__(self, command: Command, command_name: str, cause: BaseException):
        self.command = command
        self.command_name = command_name
        self.cause = cause
        self.__cause__ = cause
        super().__init__(f"Exception executing command {command_name!r}: {cause}")

    @property
    def kind(self) -> FailureKind:
        if isinstance(self.cause, CommandPermissionDeniedError):
            return FailureKind.PERMISSION_DENIED
        return FailureKind.HANDLER_FAILURE


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one execution: a value, or a normalized error."""

    command: Command
    command_name: str
    value: Any = None
    error: Optional[CommandExecutionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[FailureKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Any:
        """Return the handler's value or raise the normalized error."""
        if self.error is not None:
            raise self.error
        return self.value


class CommandExecutor:
    """Runs resolved commands on behalf of senders."""

    def __init__(self):
        self.logger = get_logger("Executor")

    async def execute(
        self,
        sender: CommandSender,
        command: Command,
        command_name: str,
        args: List[Any],
        check_permission: bool = True,
    ) -> CommandResult:
        """
        Execute ``command`` for ``sender``.

        Args:
            sender: Who issued the command
            command: Resolved command
            command_name: Name as typed, kept for error reporting
            args: Message components after the command name
            check_permission: Evaluate the permission predicate first

        Returns:
            CommandResult; failures never raise out of this method
        """
        try:
            allowed = not check_permission or command.test_permission(sender)
        except Exception as e:
            return CommandResult(command, command_name, error=CommandExecutionError(command, command_name, e))

        if not allowed:
            self.logger.debug(f"{sender.name} denied: {command_name}")
            return CommandResult(
                command,
                command_name,
                error=CommandExecutionError(command, command_name, CommandPermissionDeniedError(command, sender)),
            )

        self.logger.debug(f"Executing: {command_name} {args} (by {sender.name})")
        try:
            value = await command.on_command(sender, args)
        except Exception as e:
            return CommandResult(command, command_name, error=CommandExecutionError(command, command_name, e))

        return CommandResult(command, command_name, value=value)
