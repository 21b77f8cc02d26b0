"""Small helpers shared by the grammar and table builders."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping

_CONTROL_ESCAPES = {"f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v"}
_LITERAL_ESCAPES = set("^-\\*+?$.():=!<|[]{}")


def assign_indices(
    symbols: Iterable[str], mapping: MutableMapping[str, int], start: int
) -> int:
    """Number ``symbols`` in sorted order from ``start`` into ``mapping``.

    Symbols already present keep their index, but still use up a number.
    Returns the next unused number.
    """
    count = start
    for symbol in sorted(set(symbols)):
        mapping.setdefault(symbol, count)
        count += 1
    return count


def unescape(token: str) -> str:
    """Return the character a one- or two-character escape token stands for."""
    if len(token) == 1:
        return token
    if len(token) == 2:
        code = token[1]
        if code in _CONTROL_ESCAPES:
            return _CONTROL_ESCAPES[code]
        if code in _LITERAL_ESCAPES:
            return code
    raise ValueError(f"not a recognised character token: {token!r}")


def add_to_set_map(
    mapping: MutableMapping[int, set[int]], source: int, goal: int
) -> None:
    """Add ``source`` to the set stored under ``goal``."""
    mapping.setdefault(goal, set()).add(source)


def merge_set_maps(
    target: MutableMapping[int, set[int]],
    nested: Mapping[int, Mapping[int, Iterable[int]]],
) -> None:
    """Union every inner mapping of ``nested`` into ``target``."""
    for inner in nested.values():
        for key, values in inner.items():
            target.setdefault(key, set()).update(values)


def record_nested(
    table: MutableMapping[int, dict[int, dict[int, int]]],
    sub_start: int,
    sub_end: int,
    start_index: int,
    end_index: int,
) -> None:
    """Set ``table[sub_end][sub_start][start_index]`` to ``end_index``."""
    table.setdefault(sub_end, {}).setdefault(sub_start, {})[start_index] = end_index