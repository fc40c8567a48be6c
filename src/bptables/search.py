import bisect
import typing

from bptables.types import Bracket, BracketKind, Interpolation, Numeric


__all__ = ["find_bracket", "locate", "closest_index", "resolve_index"]


def find_bracket(
    breakpoints: typing.Sequence[Numeric], query: Numeric
) -> typing.Optional[int]:
    """
    Find the index of the first breakpoint greater than or equal to `query`.

    :param breakpoints: Strictly ascending breakpoints.
    :param query: The breakpoint to search for.
    :return: The bracket index, or None if no breakpoint is greater than or equal
        to `query`. Unordered queries (NaN) compare false to every breakpoint, so they
        also return None.
    """
    if query != query:
        return None
    index = bisect.bisect_left(breakpoints, query)
    if index == len(breakpoints):
        return None
    return index


def locate(breakpoints: typing.Sequence[Numeric], query: Numeric) -> Bracket:
    """
    Classify where `query` falls among `breakpoints`.

    :param breakpoints: Strictly ascending breakpoints, at least two.
    :param query: The breakpoint to locate.
    :return: A `Bracket` describing an exact hit, a position below or above
        the range, or the segment that strictly contains `query`.
    """
    index = find_bracket(breakpoints, query)
    if index is None:
        return Bracket(kind=BracketKind.ABOVE, index=len(breakpoints) - 1)
    if breakpoints[index] == query:
        return Bracket(kind=BracketKind.EXACT, index=index)
    if index == 0:
        return Bracket(kind=BracketKind.BELOW, index=0)
    return Bracket(kind=BracketKind.WITHIN, index=index, lower=index - 1)


def closest_index(
    breakpoints: typing.Sequence[Numeric], index: int, query: Numeric
) -> int:
    """
    Pick the breakpoint nearest to `query` within the segment ending at `index`.

    At the exact midpoint of the segment the upper index is chosen.

    :param breakpoints: Strictly ascending breakpoints.
    :param index: Upper index of the segment containing `query`.
    :param query: A breakpoint strictly inside the segment.
    :return: `index - 1` or `index`.
    """
    span = breakpoints[index] - breakpoints[index - 1]
    remaining = breakpoints[index] - query
    # Compared doubled so integer segments never round the midpoint
    if remaining * 2 > span:
        return index - 1
    return index


def resolve_index(
    breakpoints: typing.Sequence[Numeric],
    bracket: Bracket,
    query: Numeric,
    interpolation: Interpolation,
) -> int:
    """
    Resolve a bracket to a single index for the non-blending interpolation methods.

    Exact hits and out-of-range brackets resolve to their own (clamped) index.

    :param breakpoints: Strictly ascending breakpoints the bracket was located in.
    :param bracket: Result of `locate(breakpoints, query)`.
    :param query: The located breakpoint.
    :param interpolation: One of `FLOOR`, `CEILING` or `CLOSEST`.
    :return: Index of the value to use.
    """
    if not bracket.is_within:
        return bracket.index
    if interpolation is Interpolation.FLOOR:
        return bracket.index - 1
    if interpolation is Interpolation.CEILING:
        return bracket.index
    if interpolation is Interpolation.CLOSEST:
        return closest_index(breakpoints, bracket.index, query)
    raise ValueError(f"Cannot resolve a single index for {interpolation!r}")
