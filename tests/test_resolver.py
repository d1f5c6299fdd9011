"""Tests for token -> command resolution."""

from __future__ import annotations

from types import SimpleNamespace

from commands.command_registry import CommandRegistry
from commands.resolver import CommandResolver, fuzzy_search, fuzzy_search_member, fuzzy_search_only
from conftest import build_command


def test_prefixed_alias_resolves_like_primary_name(registry: CommandRegistry, resolver: CommandResolver) -> None:
    mute = build_command("mute", "jinyan")
    registry.register(mute)

    assert resolver.resolve("/jinyan") is resolver.resolve("/mute") is mute


def test_required_prefix_command_needs_prefix(registry: CommandRegistry, resolver: CommandResolver) -> None:
    registry.register(build_command("mute"))

    assert resolver.resolve("mute") is None
    assert resolver.resolve("/MUTE") is not None


def test_optional_prefix_command_accepts_both_forms(registry: CommandRegistry, resolver: CommandResolver) -> None:
    ping = build_command("ping", prefix_optional=True)
    registry.register(ping)

    assert resolver.resolve("ping") is ping
    assert resolver.resolve("PING") is ping
    assert resolver.resolve("/ping") is ping


def test_resolve_is_exact_only(registry: CommandRegistry, resolver: CommandResolver) -> None:
    registry.register(build_command("mute"))

    assert resolver.resolve("/mutx") is None


def test_empty_tokens_resolve_to_nothing(resolver: CommandResolver) -> None:
    assert resolver.resolve("") is None
    assert resolver.resolve("/") is None


def test_custom_prefix(registry: CommandRegistry) -> None:
    mute = build_command("mute")
    registry.register(mute)
    resolver = CommandResolver(registry, prefix="!")

    assert resolver.resolve("!mute") is mute
    assert resolver.resolve("/mute") is None


def test_split_prefix(resolver: CommandResolver) -> None:
    assert resolver.split_prefix("/Mute") == (True, "mute")
    assert resolver.split_prefix("Mute") == (False, "mute")


def test_resolve_fuzzy_guesses_unique_name(registry: CommandRegistry, resolver: CommandResolver) -> None:
    mute = build_command("mute", "jinyan")
    registry.register(mute)

    assert resolver.resolve_fuzzy("/mutx") == ("mute", mute)


def test_resolve_fuzzy_without_prefix_searches_optional_names_only(
    registry: CommandRegistry, resolver: CommandResolver
) -> None:
    registry.register(build_command("mute"))

    assert resolver.resolve_fuzzy("mutx") is None


def test_resolve_fuzzy_rejects_ambiguity_unless_asked(registry: CommandRegistry, resolver: CommandResolver) -> None:
    mute = build_command("mute")
    muta = build_command("muta")
    registry.register(mute).register(muta)

    assert resolver.resolve_fuzzy("/mutx") is None
    assert resolver.resolve_fuzzy("/mutx", unique=False) == ("muta", muta)


def test_resolve_fuzzy_picks_strictly_better_candidate(registry: CommandRegistry, resolver: CommandResolver) -> None:
    mut = build_command("mut")
    registry.register(build_command("mute")).register(mut)

    assert resolver.resolve_fuzzy("/mu") == ("mut", mut)


def test_fuzzy_search_over_caller_pool() -> None:
    pool = ["reload", "restart", "status"]

    assert fuzzy_search(pool, "statux") == "status"
    assert fuzzy_search_only(pool, "re") is None


def test_fuzzy_search_member_finds_single_member() -> None:
    roster = [
        SimpleNamespace(display_name="alice"),
        SimpleNamespace(display_name="alicia"),
        SimpleNamespace(display_name="bob"),
    ]

    assert fuzzy_search_member(roster, "alic") is roster[0]


def test_fuzzy_search_member_rejects_ambiguous_name_cards() -> None:
    roster = [SimpleNamespace(display_name="tom1"), SimpleNamespace(display_name="tom2")]

    assert fuzzy_search_member(roster, "tom3") is None


def test_fuzzy_search_member_custom_index() -> None:
    roster = [SimpleNamespace(nick="Captain"), SimpleNamespace(nick="Cook")]

    assert fuzzy_search_member(roster, "Cook", index=lambda m: m.nick) is roster[1]
