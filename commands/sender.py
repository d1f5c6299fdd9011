"""
Command Senders
Who a command runs on behalf of, and where its replies go
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from utils.logger import console, get_logger

logger = get_logger("Sender")


class CommandSender(ABC):
    """Identity and reply channel of whoever issued a command."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name used in logs and replies."""

    @property
    def user_id(self) -> Optional[str]:
        return None

    @property
    def is_console(self) -> bool:
        return False

    @property
    def is_group_admin(self) -> bool:
        return False

    @abstractmethod
    async def send_message(self, text: str) -> bool:
        """
        Send a reply to this sender.

        Returns:
            True if the message was delivered
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"


class ConsoleCommandSender(CommandSender):
    """The operator typing directly into the console."""

    @property
    def name(self) -> str:
        return "CONSOLE"

    @property
    def is_console(self) -> bool:
        return True

    async def send_message(self, text: str) -> bool:
        console.print(text, markup=False, highlight=False)
        return True


class UserCommandSender(CommandSender):
    """A chat user, optionally speaking inside a group."""

    def __init__(self, user: Any, channel: Any = None, group: Any = None, is_admin: bool = False):
        self.user = user
        self.channel = channel
        self.group = group
        self._is_admin = is_admin

    @property
    def name(self) -> str:
        return getattr(self.user, "display_name", None) or getattr(self.user, "name", None) or str(self.user)

    @property
    def user_id(self) -> Optional[str]:
        user_id = getattr(self.user, "id", None)
        return str(user_id) if user_id is not None else None

    @property
    def is_group_admin(self) -> bool:
        return self.group is not None and self._is_admin

    async def send_message(self, text: str) -> bool:
        """Send to the reply channel, suppressing transport errors."""
        if not self.channel or not hasattr(self.channel, "send"):
            return False
        try:
            await self.channel.send(text)
            return True
        except Exception as e:
            logger.debug(f"Failed to reply to {self.name}: {e}")
            return False


def as_command_sender(message: Any) -> UserCommandSender:
    """
    Build a sender from a transport message.

    Args:
        message: Object with ``author``, ``channel`` and optional ``guild``

    Returns:
        UserCommandSender replying in the message's channel
    """
    author = message.author
    group = getattr(message, "guild", None)
    permissions = getattr(author, "guild_permissions", None)
    is_admin = bool(getattr(permissions, "administrator", False))
    return UserCommandSender(author, channel=message.channel, group=group, is_admin=is_admin)
