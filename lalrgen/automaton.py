"""LALR(1) parsing tables built from an augmented grammar."""

from __future__ import annotations

import argparse
import csv
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .digraph import Digraph
from .grammar import END_MARKER, Grammar, load_grammar
from .helpers import assign_indices
from .items import LALRState, build_lr0_automaton, closure_lalr

# Stands in for "any lookahead" while working out which lookaheads propagate.
_PROPAGATE = "\x00#"


class Action(Enum):
    """What the parser does for a state and a grammar symbol."""

    SHIFT = "shift"
    REDUCE = "reduce"
    ACCEPT = "accept"
    ERROR = "error"


@dataclass(frozen=True)
class TableItem:
    """One cell of the parsing table.

    ``target`` is the next state for a shift (or a goto on a nonterminal)
    and the production number for a reduction.
    """

    action: Action = Action.ERROR
    target: int | None = None

    def __str__(self) -> str:
        if self.action is Action.SHIFT:
            return f"m{self.target}"
        if self.action is Action.REDUCE:
            return f"r{self.target}"
        if self.action is Action.ACCEPT:
            return "A"
        return "ERR"


_ERROR = TableItem()


@dataclass(frozen=True)
class Conflict:
    """A reduction that could not be entered because the cell was taken."""

    state: int
    symbol: str
    existing: TableItem
    production: int

    @property
    def kind(self) -> str:
        return "shift-reduce" if self.existing.action is Action.SHIFT else "reduce-reduce"

    def __str__(self) -> str:
        if self.existing.action is Action.SHIFT:
            wanted = f"shift to state {self.existing.target}"
        else:
            wanted = f"reduce by production {self.existing.target}"
        return (
            f"{self.kind} conflict: state {self.state} on {self.symbol!r} would "
            f"{wanted} and also reduce by production {self.production}"
        )


class LALRAutomaton:
    """The LALR(1) automaton of a grammar and its parsing table.

    Columns are the terminals in sorted order followed by the nonterminals
    in sorted order. Conflicting reductions are not entered; they are kept
    in ``conflicts`` and the earlier entry stays in the table.
    """

    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar
        self.first = grammar.first_sets()
        self.follow = grammar.follow_sets(self.first)
        self.symbol_index: dict[str, int] = {}
        count = assign_indices(grammar.terminals, self.symbol_index, 0)
        assign_indices(grammar.nonterminals, self.symbol_index, count)
        if END_MARKER not in self.symbol_index:
            raise ValueError(f"grammar terminals must include {END_MARKER!r}")
        self.columns = sorted(self.symbol_index, key=self.symbol_index.__getitem__)

        self.states: Digraph[LALRState, str] = build_lr0_automaton(grammar)
        self.start = 0
        self.conflicts: list[Conflict] = []
        self._goto = self._transitions()
        self.table: list[dict[str, TableItem]] = [
            {symbol: _ERROR for symbol in self.columns} for _ in range(len(self.states))
        ]
        self._fill_shifts()
        self._compute_lookaheads()
        self._fill_reductions()
        self.accept = self._fill_accept()

    @classmethod
    def from_file(cls, path: str | Path) -> LALRAutomaton:
        """Build the automaton for the grammar described in ``path``."""
        return cls(load_grammar(path))

    def action(self, state: int, symbol: str) -> TableItem:
        """Return the table entry for ``state`` and ``symbol``."""
        if not 0 <= state < len(self.table):
            raise IndexError(f"no state {state}")
        if symbol not in self.symbol_index:
            raise KeyError(symbol)
        return self.table[state][symbol]

    def _transitions(self) -> list[dict[str, int]]:
        goto: list[dict[str, int]] = []
        for index in range(len(self.states)):
            moves = {symbol: head for head, symbol in self.states.out_edges(index)}
            loop = self.states.self_loop(index)
            if loop is not None:
                moves[loop] = index
            goto.append(moves)
        return goto

    def _fill_shifts(self) -> None:
        for index, moves in enumerate(self._goto):
            for symbol, target in moves.items():
                if symbol not in self.symbol_index:
                    raise ValueError(f"symbol {symbol!r} is not declared in the grammar")
                self.table[index][symbol] = TableItem(Action.SHIFT, target)

    def _compute_lookaheads(self) -> None:
        productions = self.grammar.productions
        links: dict[tuple[int, int, int], set[tuple[int, int, int]]] = {}

        for index in range(len(self.states)):
            kernel = self.states.vertex_data(index).kernel
            for production, dots in kernel.items():
                body = productions[production].body
                for dot in dots:
                    if dot >= len(body):
                        continue
                    source = (index, production, dot)
                    dests = links.setdefault(source, set())
                    if not body[dot].terminal:
                        probe = {production: {dot: {_PROPAGATE}}}
                        closure = closure_lalr(self.grammar, self.first, probe)
                        for number, attributes in closure.items():
                            item_body = productions[number].body
                            if attributes.dot >= len(item_body):
                                continue
                            target = self._goto[index][item_body[attributes.dot].name]
                            target_kernel = self.states.vertex_data(target).kernel
                            entry = target_kernel.setdefault(number, {}).setdefault(
                                attributes.dot + 1, set()
                            )
                            entry |= attributes.lookaheads - {_PROPAGATE}
                            if _PROPAGATE in attributes.lookaheads:
                                dests.add((target, number, attributes.dot + 1))
                    target = self._goto[index][body[dot].name]
                    dests.add((target, production, dot + 1))

        augmented = self.grammar.by_head[self.grammar.augmented_start][0]
        start_kernel = self.states.vertex_data(self.start).kernel
        start_kernel.setdefault(augmented, {}).setdefault(0, set()).add(END_MARKER)

        changed = True
        while changed:
            changed = False
            for (index, production, dot), dests in links.items():
                lookaheads = self.states.vertex_data(index).kernel[production][dot]
                if not lookaheads:
                    continue
                for target, number, position in dests:
                    entry = (
                        self.states.vertex_data(target)
                        .kernel.setdefault(number, {})
                        .setdefault(position, set())
                    )
                    if not lookaheads <= entry:
                        entry |= lookaheads
                        changed = True

    def _reduce(self, state: int, symbol: str, production: int) -> None:
        if symbol not in self.symbol_index:
            raise ValueError(f"lookahead {symbol!r} is not declared in the grammar")
        existing = self.table[state][symbol]
        if existing.action in (Action.SHIFT, Action.REDUCE):
            self.conflicts.append(Conflict(state, symbol, existing, production))
            return
        self.table[state][symbol] = TableItem(Action.REDUCE, production)

    def _fill_reductions(self) -> None:
        productions = self.grammar.productions
        for index in range(len(self.states)):
            state = self.states.vertex_data(index)
            state.nonkernel = closure_lalr(self.grammar, self.first, state.kernel)
            for production in sorted(state.kernel):
                length = len(productions[production].body)
                for dot in sorted(state.kernel[production]):
                    if dot == length:
                        for symbol in sorted(state.kernel[production][dot]):
                            self._reduce(index, symbol, production)
            for production in sorted(state.nonkernel):
                attributes = state.nonkernel[production]
                if attributes.dot == 0 and not productions[production].body:
                    for symbol in sorted(attributes.lookaheads):
                        self._reduce(index, symbol, production)

    def _fill_accept(self) -> int:
        start_symbol = self.grammar.start_symbol
        target = self._goto[self.start].get(start_symbol)
        if target is None:
            raise ValueError(
                f"start state has no transition on start symbol {start_symbol!r}"
            )
        self.table[target][END_MARKER] = TableItem(Action.ACCEPT)
        return target


def _write_table(automaton: LALRAutomaton, stream) -> None:
    writer = csv.writer(stream)
    writer.writerow([" ", *automaton.columns])
    for index, row in enumerate(automaton.table):
        writer.writerow([f"state {index}", *(str(row[symbol]) for symbol in automaton.columns)])


def main(argv: Sequence[str] | None = None) -> int:
    """Build the LALR(1) table for a grammar file and write it as CSV."""
    parser = argparse.ArgumentParser(description="Generate an LALR(1) parsing table.")
    parser.add_argument("grammar", help="grammar description file")
    parser.add_argument("-o", "--output", help="CSV file to write (default: stdout)")
    args = parser.parse_args(argv)

    try:
        automaton = LALRAutomaton.from_file(args.grammar)
    except (OSError, ValueError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    for conflict in automaton.conflicts:
        print(f"ERROR: {conflict}", file=sys.stderr)

    if args.output:
        with open(args.output, "w", newline="", encoding="utf-8") as stream:
            _write_table(automaton, stream)
    else:
        _write_table(automaton, sys.stdout)
    return 0