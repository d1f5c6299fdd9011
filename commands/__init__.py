"""
Command system for the chat console.
"""

from .sender import CommandSender, ConsoleCommandSender, UserCommandSender, as_command_sender
from .permission import (
    ANY,
    CONSOLE,
    GROUP_ADMIN,
    AnyPermission,
    ConsolePermission,
    ExactUserPermission,
    GroupAdminPermission,
    Permission,
)
from .command import Command, CommandDefinition, SimpleCommand, make_command
from .fuzzy import best_match, score, unique_best_match
from .command_registry import CommandRegistry
from .resolver import CommandResolver, fuzzy_search, fuzzy_search_member, fuzzy_search_only
from .executor import (
    CommandExecutionError,
    CommandExecutor,
    CommandPermissionDeniedError,
    CommandResult,
    FailureKind,
)
from .dispatcher import InboundDispatcher, format_failure
from .builtin import BuiltinCommands

__all__ = [
    "ANY",
    "CONSOLE",
    "GROUP_ADMIN",
    "AnyPermission",
    "BuiltinCommands",
    "Command",
    "CommandDefinition",
    "CommandExecutionError",
    "CommandExecutor",
    "CommandPermissionDeniedError",
    "CommandRegistry",
    "CommandResolver",
    "CommandResult",
    "CommandSender",
    "ConsoleCommandSender",
    "ConsolePermission",
    "ExactUserPermission",
    "FailureKind",
    "GroupAdminPermission",
    "InboundDispatcher",
    "Permission",
    "SimpleCommand",
    "UserCommandSender",
    "as_command_sender",
    "best_match",
    "make_command",
    "format_failure",
    "fuzzy_search",
    "fuzzy_search_member",
    "fuzzy_search_only",
    "score",
    "unique_best_match",
]
