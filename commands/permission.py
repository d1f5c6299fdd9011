"""
Command permissions.

A permission is a yes/no predicate over a :class:`CommandSender`.
Permissions compose with ``|`` and ``&``.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Tuple, Union

from commands.sender import CommandSender


class Permission(ABC):
    """Predicate deciding whether a sender may run a command."""

    @abstractmethod
    def test(self, sender: CommandSender) -> bool:
        ...

    def __or__(self, other: "Permission") -> "Permission":
        return AnyOfPermission(self, other)

    def __and__(self, other: "Permission") -> "Permission":
        return AllOfPermission(self, other)


class AnyPermission(Permission):
    """Everyone."""

    def test(self, sender: CommandSender) -> bool:
        return True

    def __repr__(self) -> str:
        return "AnyPermission()"


class ConsolePermission(Permission):
    """Only the console operator."""

    def test(self, sender: CommandSender) -> bool:
        return sender.is_console

    def __repr__(self) -> str:
        return "ConsolePermission()"


class GroupAdminPermission(Permission):
    """Administrators of the group the message was sent in."""

    def test(self, sender: CommandSender) -> bool:
        return sender.is_group_admin

    def __repr__(self) -> str:
        return "GroupAdminPermission()"


class ExactUserPermission(Permission):
    """A fixed set of user IDs."""

    def __init__(self, *user_ids: Union[str, int]):
        self.user_ids = frozenset(str(user_id) for user_id in user_ids)

    @classmethod
    def of(cls, user_ids: Iterable[Union[str, int]]) -> "ExactUserPermission":
        return cls(*user_ids)

    def test(self, sender: CommandSender) -> bool:
        return sender.user_id is not None and sender.user_id in self.user_ids

    def __repr__(self) -> str:
        return f"ExactUserPermission({', '.join(sorted(self.user_ids))})"


class AnyOfPermission(Permission):
    def __init__(self, *permissions: Permission):
        self.permissions: Tuple[Permission, ...] = permissions

    def test(self, sender: CommandSender) -> bool:
        return any(p.test(sender) for p in self.permissions)

    def __repr__(self) -> str:
        return " | ".join(repr(p) for p in self.permissions)


class AllOfPermission(Permission):
    def __init__(self, *permissions: Permission):
        self.permissions: Tuple[Permission, ...] = permissions

    def test(self, sender: CommandSender) -> bool:
        return all(p.test(sender) for p in self.permissions)

    def __repr__(self) -> str:
        return " & ".join(repr(p) for p in self.permissions)


ANY = AnyPermission()
CONSOLE = ConsolePermission()
GROUP_ADMIN = GroupAdminPermission()
