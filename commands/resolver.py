"""
Command Resolver
Turns the first token of a message into a registered command
"""

from operator import attrgetter
from typing import Any, Callable, Iterable, Optional, Tuple, TypeVar

from commands.command import Command
from commands.command_registry import CommandRegistry
from commands.fuzzy import best_match, unique_best_match

T = TypeVar("T")


class CommandResolver:
    """Exact and (opt-in) fuzzy lookup of commands in a registry."""

    def __init__(self, registry: CommandRegistry, prefix: str = "/"):
        self.registry = registry
        self.prefix = prefix

    def split_prefix(self, raw_token: str) -> Tuple[bool, str]:
        """
        Strip one leading prefix character.

        Returns:
            (prefix_was_present, lower-cased name)
        """
        if self.prefix and raw_token.startswith(self.prefix):
            return True, raw_token[len(self.prefix):].lower()
        return False, raw_token.lower()

    def resolve(self, raw_token: str) -> Optional[Command]:
        """
        Exact lookup of a user-typed token.

        ``/name`` searches the required-prefix names, then the
        optional-prefix ones (those accept the prefix too). ``name``
        searches optional-prefix names only.

        Args:
            raw_token: First component of a message, prefix included or not

        Returns:
            Command or None
        """
        if not isinstance(raw_token, str) or not raw_token:
            return None

        has_prefix, name = self.split_prefix(raw_token)
        if not name:
            return None

        if has_prefix:
            return self.registry.lookup(name, require_prefix=True) or self.registry.lookup(
                name, require_prefix=False
            )
        return self.registry.lookup(name, require_prefix=False)

    def resolve_fuzzy(self, raw_token: str, unique: bool = True) -> Optional[Tuple[str, Command]]:
        """
        Guess the command a mistyped token meant.

        Scans a snapshot of the names visible for the token's form, so the
        registry lock is not held during the scan.

        Args:
            raw_token: Token as typed
            unique: Reject ambiguous guesses (several perfect scores)

        Returns:
            (matched name, command) or None
        """
        if not isinstance(raw_token, str) or not raw_token:
            return None

        has_prefix, name = self.split_prefix(raw_token)
        if not name:
            return None

        pool = self.registry.snapshot_names(require_prefix=False)
        if has_prefix:
            pool |= self.registry.snapshot_names(require_prefix=True)

        search = unique_best_match if unique else best_match
        matched = search(sorted(pool), name)
        if matched is None:
            return None

        cmd = self.registry.lookup_exact(matched)
        if cmd is None:
            # Unregistered between snapshot and lookup
            return None
        return matched, cmd


def fuzzy_search(pool: Iterable[T], target: str, index: Callable[[T], str] = str) -> Optional[T]:
    """Best guess for ``target`` among ``pool``, keyed by ``index``."""
    return best_match(pool, target, index)


def fuzzy_search_only(pool: Iterable[T], target: str, index: Callable[[T], str] = str) -> Optional[T]:
    """Best guess for ``target``, or None when the guess is ambiguous."""
    return unique_best_match(pool, target, index)


def fuzzy_search_member(
    members: Iterable[Any],
    name_card: str,
    index: Callable[[Any], str] = attrgetter("display_name"),
) -> Optional[Any]:
    """
    Resolve a display name to exactly one member of a group roster.

    Args:
        members: Group members
        name_card: Name as typed by the user
        index: Member -> display name

    Returns:
        The member, or None if nobody or more than one member matches
    """
    return fuzzy_search_only(members, name_card, index)
