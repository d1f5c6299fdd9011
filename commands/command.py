"""
Command
What a plugin hands to the registry: names, permission and a handler
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from commands.permission import ANY, Permission
from commands.sender import CommandSender

# Command handler type alias, sync or async
CommandHandler = Callable[[CommandSender, List[Any]], Any]


class CommandDefinition:
    """Definition of a command."""

    def __init__(
        self,
        name: str,
        description: str = "",
        usage: str = "",
        category: str = "General",
        aliases: Optional[Sequence[str]] = None,
        prefix_optional: bool = False,
        permission: Optional[Permission] = None,
        owner: str = "",
    ):
        self.name = name
        self.description = description
        self.usage = usage
        self.category = category
        self.aliases: Tuple[str, ...] = tuple(aliases or ())
        self.prefix_optional = prefix_optional
        self.permission = permission or ANY
        self.owner = owner

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "CommandDefinition":
        """
        Build a definition from a configuration dict.

        Args:
            config: Dict with keys:
                - name: Command name (required)
                - description: Command description
                - usage: Usage line shown in help
                - category: Command category
                - aliases: List of aliases
                - prefix_optional: Whether the command prefix may be omitted
                - permission: Permission predicate (default: everyone)
                - owner: Name of the plugin that owns the command

        Returns:
            CommandDefinition
        """
        return cls(
            name=config["name"],
            description=config.get("description", ""),
            usage=config.get("usage", ""),
            category=config.get("category", "General"),
            aliases=config.get("aliases", ()),
            prefix_optional=config.get("prefix_optional", False),
            permission=config.get("permission"),
            owner=config.get("owner", ""),
        )


class Command(ABC):
    """
    A registered capability.

    Commands are never mutated after construction; rebinding a name is a
    registry operation. Identity (``is``) is what unregistration matches on.
    """

    def __init__(self, definition: CommandDefinition):
        self._definition = definition

    @property
    def definition(self) -> CommandDefinition:
        return self._definition

    @property
    def name(self) -> str:
        return self._definition.name

    @property
    def names(self) -> Tuple[str, ...]:
        """Primary name followed by aliases."""
        return (self._definition.name,) + self._definition.aliases

    @property
    def aliases(self) -> Tuple[str, ...]:
        return self._definition.aliases

    @property
    def description(self) -> str:
        return self._definition.description

    @property
    def usage(self) -> str:
        return self._definition.usage

    @property
    def category(self) -> str:
        return self._definition.category

    @property
    def prefix_optional(self) -> bool:
        return self._definition.prefix_optional

    @property
    def permission(self) -> Permission:
        return self._definition.permission

    @property
    def owner(self) -> str:
        return self._definition.owner

    def test_permission(self, sender: CommandSender) -> bool:
        return self.permission.test(sender)

    @abstractmethod
    async def on_command(self, sender: CommandSender, args: List[Any]) -> Any:
        """Run the command. Exceptions are reported by the executor."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"


class SimpleCommand(Command):
    """Command backed by a plain function or coroutine function."""

    def __init__(self, definition: CommandDefinition, handler: CommandHandler):
        super().__init__(definition)
        self._handler = handler

    @property
    def handler(self) -> CommandHandler:
        return self._handler

    async def on_command(self, sender: CommandSender, args: List[Any]) -> Any:
        result = self._handler(sender, args)
        if inspect.isawaitable(result):
            result = await result
        return result


def make_command(config: Dict[str, Any], handler: CommandHandler) -> SimpleCommand:
    """Shorthand for ``SimpleCommand(CommandDefinition.from_config(config), handler)``."""
    return SimpleCommand(CommandDefinition.from_config(config), handler)
