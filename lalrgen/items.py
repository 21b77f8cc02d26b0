"""LR item sets: LR(0) and LALR(1) closures and the LR(0) automaton."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .digraph import Digraph
from .grammar import EMPTY, Grammar

Kernel = dict[int, dict[int, set[str]]]


@dataclass
class ItemAttributes:
    """Dot position and lookahead symbols of a non-kernel item."""

    dot: int = 0
    lookaheads: set[str] = field(default_factory=set)


@dataclass
class LALRState:
    """A state of the automaton.

    ``kernel`` maps a production number to its dot positions, each with a
    set of lookaheads. ``nonkernel`` maps a production number to the
    attributes of its closure item.
    """

    kernel: Kernel = field(default_factory=dict)
    nonkernel: dict[int, ItemAttributes] = field(default_factory=dict)

    def core(self) -> frozenset[tuple[int, int]]:
        """Return the kernel items without their lookaheads."""
        return frozenset(
            (production, dot)
            for production, dots in self.kernel.items()
            for dot in dots
        )


def _kernel_items(
    kernel: Mapping[int, Mapping[int, Iterable[str]]]
) -> Iterable[tuple[int, int, set[str]]]:
    for production, dots in kernel.items():
        for dot, lookaheads in dots.items():
            yield production, dot, set(lookaheads)


def _nonterminal_after_dot(grammar: Grammar, production: int, dot: int) -> str | None:
    body = grammar.productions[production].body
    if dot < len(body) and not body[dot].terminal:
        return body[dot].name
    return None


def closure_lr(
    grammar: Grammar, kernel: Mapping[int, Mapping[int, Iterable[str]]]
) -> dict[int, ItemAttributes]:
    """Return the non-kernel items of the LR(0) closure of ``kernel``.

    Every item returned has its dot at 0 and no lookaheads.
    """
    nonkernel: dict[int, ItemAttributes] = {}
    work = deque((production, dot) for production, dot, _ in _kernel_items(kernel))
    while work:
        production, dot = work.popleft()
        symbol = _nonterminal_after_dot(grammar, production, dot)
        if symbol is None:
            continue
        for number in grammar.by_head.get(symbol, ()):
            if number not in nonkernel:
                nonkernel[number] = ItemAttributes(0)
                work.append((number, 0))
    return nonkernel


def closure_lalr(
    grammar: Grammar,
    first: Mapping[str, Iterable[str]],
    kernel: Mapping[int, Mapping[int, Iterable[str]]],
) -> dict[int, ItemAttributes]:
    """Return the non-kernel items of the LR(1) closure of ``kernel``.

    Lookaheads of items for the same production are merged. ``first`` maps
    nonterminals to their FIRST sets, ``""`` marking the empty string.
    """
    nonkernel: dict[int, ItemAttributes] = {}
    work = deque(_kernel_items(kernel))
    while work:
        production, dot, lookaheads = work.popleft()
        symbol = _nonterminal_after_dot(grammar, production, dot)
        if symbol is None:
            continue
        body = grammar.productions[production].body
        rest = grammar.first_of_sequence(body[dot + 1 :], first)
        if not rest or EMPTY in rest:
            passed = (rest - {EMPTY}) | lookaheads
        else:
            passed = rest
        for number in grammar.by_head.get(symbol, ()):
            attributes = nonkernel.get(number)
            if attributes is None:
                nonkernel[number] = ItemAttributes(0, set(passed))
                work.append((number, 0, set(passed)))
                continue
            added = passed - attributes.lookaheads
            if added:
                attributes.lookaheads |= added
                work.append((number, 0, added))
    return nonkernel


def build_lr0_automaton(grammar: Grammar) -> Digraph[LALRState, str]:
    """Build the LR(0) automaton of ``grammar``; vertex 0 is the start state.

    Vertices hold kernel items only, with empty lookahead sets; edges and
    self-loops carry the grammar symbol of the transition. Successors of a
    state are created in sorted order of their transition symbols.
    """
    graph: Digraph[LALRState, str] = Digraph()
    augmented = grammar.by_head[grammar.augmented_start][0]
    start = LALRState(kernel={augmented: {0: set()}})
    by_core: dict[frozenset[tuple[int, int]], int] = {
        start.core(): graph.add_vertex(start)
    }
    work = deque([0])

    while work:
        current = work.popleft()
        kernel = graph.vertex_data(current).kernel
        items = [(production, dot) for production, dots in kernel.items() for dot in dots]
        items.extend(
            (production, attributes.dot)
            for production, attributes in closure_lr(grammar, kernel).items()
        )

        successors: dict[str, LALRState] = {}
        for production, dot in items:
            body = grammar.productions[production].body
            if dot < len(body):
                state = successors.setdefault(body[dot].name, LALRState())
                state.kernel.setdefault(production, {}).setdefault(dot + 1, set())

        for symbol in sorted(successors):
            state = successors[symbol]
            core = state.core()
            target = by_core.get(core)
            if target is None:
                target = graph.add_vertex(state)
                by_core[core] = target
                work.append(target)
            graph.add_edge(current, target, symbol)
    return graph