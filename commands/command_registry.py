"""
Command Registry
Thread-safe name -> command bindings for required and optional prefix forms
"""

import threading
from typing import Dict, List, Optional, Set

from commands.command import Command
from utils.logger import get_logger
from utils.validation import ValidationUtils


class CommandRegistry:
    """
    Two mappings keyed by lower-cased name.

    ``/mute``   -> required_prefix["mute"]
    ``/jinyan`` -> required_prefix["jinyan"] (alias, same command)
    ``help``    -> optional_prefix["help"]

    A name lives in at most one mapping. Every access goes through one
    reentrant lock, so readers never see a half-registered command.
    """

    def __init__(self, prefix: str = "/"):
        self.logger = get_logger("CommandRegistry")
        self.prefix = prefix
        self._lock = threading.RLock()
        self._commands: List[Command] = []
        self._required_prefix: Dict[str, Command] = {}
        self._optional_prefix: Dict[str, Command] = {}

    def register(self, command: Command, require_prefix: Optional[bool] = None) -> "CommandRegistry":
        """
        Register a command under all of its names.

        Args:
            command: Command to bind
            require_prefix: Whether the names need the prefix; defaults to
                the command's own ``prefix_optional`` flag

        Returns:
            Self for chaining

        Raises:
            ValueError: If any name is not a valid command name
        """
        if require_prefix is None:
            require_prefix = not command.prefix_optional

        keys = []
        for name in command.names:
            validation = ValidationUtils.validate_command_name(name, self.prefix)
            if not validation:
                raise ValueError(validation.error)
            keys.append(validation.sanitized)

        target = self._required_prefix if require_prefix else self._optional_prefix
        other = self._optional_prefix if require_prefix else self._required_prefix

        with self._lock:
            for key in keys:
                replaced = other.pop(key, None) or target.get(key)
                if replaced is not None and replaced is not command:
                    self.logger.debug(f"Rebinding {key!r}: {replaced.name} -> {command.name}")
                target[key] = command
            self._prune_unbound()
            if not any(c is command for c in self._commands):
                self._commands.append(command)

        form = f"{self.prefix}{command.name}" if require_prefix else command.name
        self.logger.debug(f"Registered command: {form}")
        return self

    def unregister(self, command: Command) -> bool:
        """
        Remove every binding pointing at ``command``.

        Returns:
            True if anything was removed
        """
        with self._lock:
            removed = False
            for mapping in (self._required_prefix, self._optional_prefix):
                for key in [k for k, v in mapping.items() if v is command]:
                    del mapping[key]
                    removed = True
            self._commands = [c for c in self._commands if c is not command]

        if removed:
            self.logger.debug(f"Unregistered command: {command.name}")
        return removed

    def _prune_unbound(self) -> None:
        # Commands that lost every name to a rebinding are no longer registered
        bound = {id(c) for c in self._required_prefix.values()}
        bound.update(id(c) for c in self._optional_prefix.values())
        self._commands = [c for c in self._commands if id(c) in bound]

    def lookup_exact(self, name: str) -> Optional[Command]:
        """
        Get a command by any of its names, required-prefix form first.

        Args:
            name: Name without prefix, any case

        Returns:
            Command or None if not found
        """
        key = name.lower()
        with self._lock:
            return self._required_prefix.get(key) or self._optional_prefix.get(key)

    def lookup(self, name: str, require_prefix: bool) -> Optional[Command]:
        """Look a name up in one mapping only."""
        key = name.lower()
        with self._lock:
            mapping = self._required_prefix if require_prefix else self._optional_prefix
            return mapping.get(key)

    def snapshot_names(self, require_prefix: bool) -> Set[str]:
        """Point-in-time copy of the names bound in one mapping."""
        with self._lock:
            mapping = self._required_prefix if require_prefix else self._optional_prefix
            return set(mapping)

    def registered_commands(self) -> List[Command]:
        """Registered commands, in registration order."""
        with self._lock:
            return list(self._commands)

    def is_registered(self, command: Command) -> bool:
        with self._lock:
            return any(c is command for c in self._commands)

    def requires_prefix(self, command: Command) -> bool:
        """Whether the command's primary name is bound in the required-prefix mapping."""
        with self._lock:
            return self._required_prefix.get(command.name.lower()) is command

    def __contains__(self, name: str) -> bool:
        return self.lookup_exact(name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)

    def generate_help(self) -> str:
        """
        Generate help text for all commands, grouped by category.

        Returns:
            Formatted help string
        """
        categories: Dict[str, List[Command]] = {}
        for cmd in self.registered_commands():
            categories.setdefault(cmd.category, []).append(cmd)

        lines = [
            "📖 **Commands**",
            "",
        ]

        for category, commands in categories.items():
            lines.append(f"**{category}:**")

            for cmd in commands:
                aliases_str = f" ({', '.join(cmd.aliases)})" if cmd.aliases else ""
                lines.append(f"• `{self._display_name(cmd)}`{aliases_str} - {cmd.description}")

            lines.append("")

        return "\n".join(lines).rstrip()

    def generate_command_help(self, cmd: Command) -> str:
        """
        Generate detailed help for a specific command.

        Args:
            cmd: Command to describe

        Returns:
            Formatted help string
        """
        lines = [
            f"📖 **Command:** `{self._display_name(cmd)}`",
            "",
            f"**Description:** {cmd.description}",
        ]

        if cmd.aliases:
            aliases_formatted = ", ".join(f"`{a}`" for a in cmd.aliases)
            lines.append(f"**Aliases:** {aliases_formatted}")

        if cmd.usage:
            lines.append(f"**Usage:** `{cmd.usage}`")

        if cmd.owner:
            lines.append(f"**Provided by:** {cmd.owner}")

        return "\n".join(lines)

    def _display_name(self, cmd: Command) -> str:
        return f"{self.prefix}{cmd.name}" if self.requires_prefix(cmd) else cmd.name
