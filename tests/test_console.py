"""Tests for the console wiring, built-in commands and configuration."""

from __future__ import annotations

import logging

import pytest

from bot.config import Config
from bot.console import Console
from commands.executor import FailureKind
from events.message_event import MessageEvent
from conftest import FakeSender, Recorder, build_command


@pytest.mark.asyncio
async def test_start_registers_builtins_and_subscribes(config: Config) -> None:
    console = Console(config)
    await console.start()
    try:
        assert console.match_command("help") is not None
        assert console.match_command("/help") is console.match_command("?")
        assert console.match_command("/status") is not None
        assert len(console.bus.listeners()) == 1
    finally:
        await console.stop()

    assert console.match_command("help") is None
    assert console.bus.listeners() == []


@pytest.mark.asyncio
async def test_register_and_unregister_surface(config: Config) -> None:
    console = Console(config)
    mute = console.register_command(build_command("mute", "jinyan"))

    assert console.match_command("/JINYAN") is mute
    assert console.unregister_command(mute) is True
    assert console.match_command("/mute") is None


@pytest.mark.asyncio
async def test_bus_events_reach_registered_commands(config: Config) -> None:
    handler = Recorder()
    async with Console(config) as console:
        console.register_command(build_command("mute", handler=handler))
        sender = FakeSender()

        consumed = await console.bus.post(MessageEvent(sender, "/mute bob"))

    assert consumed is True
    assert handler.calls == [(sender, ["bob"])]


@pytest.mark.asyncio
async def test_help_lists_commands(config: Config) -> None:
    async with Console(config) as console:
        console.register_command(build_command("mute", description="Silence a member"))
        sender = FakeSender()

        await console.bus.post(MessageEvent(sender, "help"))

    assert len(sender.replies) == 1
    assert "`/mute` - Silence a member" in sender.replies[0]
    assert "`help` (?)" in sender.replies[0]


@pytest.mark.asyncio
async def test_help_for_mistyped_command_uses_fuzzy_guess(config: Config) -> None:
    async with Console(config) as console:
        console.register_command(build_command("mute", description="Silence a member"))
        sender = FakeSender()

        await console.bus.post(MessageEvent(sender, "/help /mutx"))
        await console.bus.post(MessageEvent(sender, "/help zzz"))

    assert "**Command:** `/mute`" in sender.replies[0]
    assert sender.replies[1] == "❌ Unknown command: `zzz`"


@pytest.mark.asyncio
async def test_status_requires_operator(config: Config) -> None:
    async with Console(config) as console:
        stranger = FakeSender(user_id="7")
        operator = FakeSender(user_id="42")

        await console.bus.post(MessageEvent(stranger, "/status"))
        await console.bus.post(MessageEvent(operator, "/stats"))

    assert stranger.replies == ["❌ You don't have permission to use `/status`"]
    assert "Console Status" in operator.replies[0]


@pytest.mark.asyncio
async def test_console_line_runs_as_console(config: Config) -> None:
    async with Console(config) as console:
        result = await console.execute_console_line("/status")
        missing = await console.execute_console_line("/nothing here")

    assert result.ok
    assert "Console Status" in result.value
    assert missing is None


@pytest.mark.asyncio
async def test_console_line_failure_is_normalized(config: Config) -> None:
    async with Console(config) as console:
        console.register_command(build_command("crash", handler=Recorder(error=KeyError("k"))))
        result = await console.execute_console_line("/crash")

    assert result.kind is FailureKind.HANDLER_FAILURE
    assert console.running is False


def test_permission_checks_can_be_disabled() -> None:
    console = Console(Config(CHECK_PERMISSION=False))
    assert console.dispatcher.check_permission is False


def test_custom_prefix(config: Config) -> None:
    console = Console(Config(COMMAND_PREFIX="!"))
    mute = console.register_command(build_command("mute"))

    assert console.match_command("!mute") is mute
    assert console.match_command("/mute") is None


@pytest.mark.asyncio
async def test_question_mark_prefix_drops_clashing_help_alias() -> None:
    async with Console(Config(COMMAND_PREFIX="?")) as console:
        help_command = console.match_command("?help")

        assert help_command is not None
        assert console.match_command("help") is help_command
        assert not help_command.aliases
        assert console.match_command("?") is None


def test_invalid_prefix_is_rejected() -> None:
    with pytest.raises(ValueError):
        Console(Config(COMMAND_PREFIX="ab"))
    with pytest.raises(ValueError):
        Config(COMMAND_PREFIX="x").validate()


def test_token_required_only_for_transport() -> None:
    Config().validate()
    with pytest.raises(ValueError, match="DISCORD_TOKEN"):
        Config().validate(require_token=True)


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMMAND_PREFIX", "!")
    monkeypatch.setenv("OPERATOR_IDS", "1, 2,,3")
    monkeypatch.setenv("CHECK_PERMISSION", "false")
    monkeypatch.setenv("OWNER_ONLY", "no")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    cfg = Config.from_env()

    assert cfg.COMMAND_PREFIX == "!"
    assert cfg.OPERATOR_IDS == ("1", "2", "3")
    assert cfg.CHECK_PERMISSION is False
    assert cfg.OWNER_ONLY is False
    assert cfg.REPLY_ON_FAILURE is True
    assert cfg.log_level == logging.DEBUG


def test_log_level_from_name() -> None:
    assert Config(LOG_LEVEL="WARNING").log_level == logging.WARNING
    assert Config(LOG_LEVEL="nonsense").log_level == logging.INFO
