from __future__ import annotations

from typing import Any, List, Optional

import pytest

from bot.config import Config
from commands.command import make_command
from commands.command_registry import CommandRegistry
from commands.resolver import CommandResolver
from commands.sender import CommandSender


class FakeSender(CommandSender):
    def __init__(
        self,
        name: str = "tester",
        user_id: Optional[str] = "1001",
        console: bool = False,
        admin: bool = False,
    ) -> None:
        self._name = name
        self._user_id = user_id
        self._console = console
        self._admin = admin
        self.replies: List[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def is_console(self) -> bool:
        return self._console

    @property
    def is_group_admin(self) -> bool:
        return self._admin

    async def send_message(self, text: str) -> bool:
        self.replies.append(text)
        return True


class Recorder:
    """Handler stub counting its calls."""

    def __init__(self, result: Any = "done", error: Optional[BaseException] = None) -> None:
        self.calls: List[tuple] = []
        self.result = result
        self.error = error

    async def __call__(self, sender: CommandSender, args: List[Any]) -> Any:
        self.calls.append((sender, list(args)))
        if self.error is not None:
            raise self.error
        return self.result


def build_command(name: str, *aliases: str, handler=None, **config):
    return make_command({"name": name, "aliases": list(aliases), **config}, handler or Recorder())


@pytest.fixture
def sender() -> FakeSender:
    return FakeSender()


@pytest.fixture
def registry() -> CommandRegistry:
    return CommandRegistry()


@pytest.fixture
def resolver(registry: CommandRegistry) -> CommandResolver:
    return CommandResolver(registry)


@pytest.fixture
def config() -> Config:
    return Config(OPERATOR_IDS=("42",))
