"""
Fuzzy Matcher
Prefix-walk similarity scoring used to guess command and member names
"""

from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

PERFECT_SCORE = 1.0


def score(candidate: str, query: str) -> float:
    """
    Score how closely ``query`` matches ``candidate``.

    The walk is driven by the candidate: each leading character shared
    with the query raises the score, and every candidate position past
    the end of the query lowers it again. A run that ends exactly one
    short of the candidate's length counts as a perfect match, so
    ``score("mute", "mutx") == 1.0`` and ``score("a", "b") == 1.0``.

    Args:
        candidate: Registered name being scored
        query: User supplied text

    Returns:
        1.0 for a (lenient) perfect match, otherwise ``step / len(candidate)``,
        which can be 0.0 or negative for weak matches
    """
    if candidate == query:
        return PERFECT_SCORE
    if len(query) > len(candidate):
        return 0.0

    step = 0
    for i in range(len(candidate)):
        if i >= len(query):
            step -= 1
            continue
        if candidate[i] != query[i]:
            break
        step += 1

    if step == len(candidate) - 1:
        return PERFECT_SCORE
    return step / len(candidate)


def best_match(
    pool: Iterable[T],
    query: str,
    index: Callable[[T], str] = str,
) -> Optional[T]:
    """
    Return the pool item whose index string best matches ``query``.

    An item whose index equals ``query`` is returned immediately. Ties
    keep the first item seen; items scoring 0.0 or less are never picked.
    """
    potential: Optional[T] = None
    rate = 0.0
    for item in pool:
        name = index(item)
        if name == query:
            return item
        current = score(name, query)
        if current > rate:
            rate = current
            potential = item
    return potential


def unique_best_match(
    pool: Iterable[T],
    query: str,
    index: Callable[[T], str] = str,
) -> Optional[T]:
    """
    Like :func:`best_match`, but ambiguity means no match.

    When two or more items reach a perfect score the result is ``None``:
    searching ``"mutx"`` in a pool holding ``"mute"`` and ``"muta"``
    finds nothing. There is no exact-match shortcut here, so an exact
    name can still be rejected by a lenient twin.
    """
    potential: Optional[T] = None
    rate = 0.0
    collide = 0
    for item in pool:
        current = score(index(item), query)
        if current > rate:
            rate = current
            potential = item
        if current == PERFECT_SCORE:
            collide += 1
        if collide > 1:
            return None
    return potential
