"""
Built-in Commands
Commands the console registers for itself
"""

from typing import Any, List, Optional

from commands.command import Command, make_command
from commands.command_registry import CommandRegistry
from commands.permission import ANY, Permission
from commands.resolver import CommandResolver
from commands.sender import CommandSender
from utils.monitoring import Monitoring
from utils.validation import ValidationUtils

OWNER = "console"
HELP_ALIASES = ("?",)


class BuiltinCommands:
    """Help and status commands backed by the console's own registry."""

    def __init__(
        self,
        registry: CommandRegistry,
        resolver: CommandResolver,
        monitoring: Monitoring,
        admin_permission: Permission,
    ):
        self.registry = registry
        self.resolver = resolver
        self.monitoring = monitoring
        self.commands: List[Command] = [
            make_command(
                {
                    "name": "help",
                    "description": "Show available commands",
                    "usage": "help [command]",
                    # Aliases starting with the prefix cannot be registered
                    "aliases": [a for a in HELP_ALIASES if ValidationUtils.validate_command_name(a, registry.prefix)],
                    "prefix_optional": True,
                    "permission": ANY,
                    "owner": OWNER,
                },
                self._cmd_help,
            ),
            make_command(
                {
                    "name": "status",
                    "description": "Show dispatch counters and process health",
                    "usage": "/status",
                    "aliases": ["stats"],
                    "permission": admin_permission,
                    "owner": OWNER,
                },
                self._cmd_status,
            ),
        ]

    def register_all(self) -> None:
        for cmd in self.commands:
            self.registry.register(cmd)

    def unregister_all(self) -> None:
        for cmd in self.commands:
            self.registry.unregister(cmd)

    def find(self, token: str) -> Optional[Command]:
        """Exact name first, then an unambiguous fuzzy guess."""
        _, name = self.resolver.split_prefix(token)
        cmd = self.registry.lookup_exact(name)
        if cmd is not None:
            return cmd
        guess = self.resolver.resolve_fuzzy(token, unique=True)
        return guess[1] if guess else None

    async def _cmd_help(self, sender: CommandSender, args: List[Any]) -> str:
        """Handle help command."""
        if args:
            token = str(args[0])
            cmd = self.find(token)
            text = self.registry.generate_command_help(cmd) if cmd else f"❌ Unknown command: `{token}`"
        else:
            text = self.registry.generate_help()
        await sender.send_message(text)
        return text

    async def _cmd_status(self, sender: CommandSender, args: List[Any]) -> str:
        """Handle /status command."""
        text = self.monitoring.format_status(len(self.registry))
        await sender.send_message(text)
        return text
