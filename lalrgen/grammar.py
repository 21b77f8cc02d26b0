"""Context-free grammars: reading the section format, FIRST and FOLLOW sets."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

EMPTY = ""
END_MARKER = "$"

_SECTION_OPEN = {"#1b", "#2b", "#3b", "#4b"}
_SECTION_CLOSE = {"#1e", "#2e", "#3e", "#4e"}
_PRODUCTION_OPEN = "#b"
_PRODUCTION_CLOSE = "#e"
_NONTERMINAL_MODE = "$1"
_TERMINAL_MODE = "$2"


class _Mode(Enum):
    TERMINAL = "terminal"
    NONTERMINAL = "nonterminal"


@dataclass(frozen=True)
class Symbol:
    """A grammar symbol in a production body."""

    name: str
    terminal: bool


@dataclass(frozen=True)
class Production:
    """A numbered production ``head -> body``."""

    number: int
    head: str
    body: tuple[Symbol, ...] = ()

    @property
    def nonterminals(self) -> frozenset[str]:
        """Names of the nonterminals occurring in the body."""
        return frozenset(symbol.name for symbol in self.body if not symbol.terminal)


@dataclass
class Grammar:
    """An augmented grammar with productions numbered from 1."""

    nonterminals: set[str] = field(default_factory=set)
    terminals: set[str] = field(default_factory=set)
    start_symbol: str = ""
    augmented_start: str = ""
    productions: dict[int, Production] = field(default_factory=dict)
    by_head: dict[str, list[int]] = field(default_factory=dict)

    def first_of_sequence(
        self, symbols: Sequence[Symbol], first: Mapping[str, Iterable[str]]
    ) -> set[str]:
        """Return FIRST of a symbol sequence; ``""`` marks that it can vanish.

        A nonterminal without a FIRST set ends the scan without adding ``""``.
        """
        result: set[str] = set()
        for symbol in symbols:
            if symbol.terminal:
                result.add(symbol.name)
                return result
            symbol_first = set(first.get(symbol.name, ()))
            if EMPTY not in symbol_first:
                result |= symbol_first
                return result
            result |= symbol_first - {EMPTY}
        result.add(EMPTY)
        return result

    def first_sets(self) -> dict[str, set[str]]:
        """Return the FIRST set of every nonterminal that has a non-empty one."""
        first: dict[str, set[str]] = {}
        changed = True
        while changed:
            changed = False
            for production in self.productions.values():
                additions = self.first_of_sequence(production.body, first)
                if not additions:
                    continue
                current = first.setdefault(production.head, set())
                if not additions <= current:
                    current |= additions
                    changed = True
        return first

    def follow_sets(
        self, first: Mapping[str, Iterable[str]] | None = None
    ) -> dict[str, set[str]]:
        """Return the FOLLOW set of the augmented start and of every body nonterminal."""
        if first is None:
            first = self.first_sets()
        follow: dict[str, set[str]] = {self.augmented_start: {END_MARKER}}
        depends_on: dict[str, set[str]] = {}
        for production in self.productions.values():
            body = production.body
            for position, symbol in enumerate(body):
                if symbol.terminal:
                    continue
                entry = follow.setdefault(symbol.name, set())
                rest = self.first_of_sequence(body[position + 1 :], first)
                entry |= rest - {EMPTY}
                if EMPTY in rest and production.head != symbol.name:
                    depends_on.setdefault(symbol.name, set()).add(production.head)

        changed = True
        while changed:
            changed = False
            for target, sources in depends_on.items():
                entry = follow[target]
                for source in sources:
                    incoming = follow.setdefault(source, set())
                    if not incoming <= entry:
                        entry |= incoming
                        changed = True
        return follow


def is_key_subset(mapping: Mapping[str, object], keys: Iterable[str]) -> bool:
    """Return True if every item of ``keys`` is a key of ``mapping``."""
    return all(key in mapping for key in keys)


def parse_grammar(text: str) -> Grammar:
    """Build a grammar from its whitespace-separated section description.

    Sections ``#1b``..``#1e`` list nonterminals, ``#2b``..``#2e`` terminals,
    ``#3b``..``#3e`` the augmented start symbol followed by the original one,
    and ``#4b``..``#4e`` productions, each enclosed in ``#b``..``#e`` with the
    head first; ``$1`` and ``$2`` switch between nonterminals and terminals.
    """
    grammar = Grammar()
    section = ""
    mode: _Mode | None = None
    expect_head = True
    head = ""
    body: list[Symbol] = []
    productions: list[tuple[str, list[Symbol]]] = []

    for token in text.split():
        if token in _SECTION_OPEN:
            section = token
            if token == "#3b":
                expect_head = True
        elif token in _SECTION_CLOSE or token == _PRODUCTION_CLOSE:
            continue
        elif token == _PRODUCTION_OPEN:
            expect_head = True
            mode = _Mode.NONTERMINAL
        elif token == _NONTERMINAL_MODE:
            mode = _Mode.NONTERMINAL
        elif token == _TERMINAL_MODE:
            mode = _Mode.TERMINAL
        elif section == "#4b":
            if mode is None:
                raise ValueError(f"symbol {token!r} appears outside a production")
            if mode is _Mode.NONTERMINAL and expect_head:
                expect_head = False
                head = token
                body = []
                productions.append((head, body))
            elif not productions or expect_head:
                raise ValueError(f"production body symbol {token!r} has no head")
            else:
                body.append(Symbol(token, mode is _Mode.TERMINAL))
        elif section == "#3b":
            if expect_head:
                expect_head = False
                grammar.augmented_start = token
            else:
                grammar.start_symbol = token
        elif section == "#2b":
            grammar.terminals.add(token)
        else:
            grammar.nonterminals.add(token)

    for number, (head, body) in enumerate(productions, start=1):
        grammar.productions[number] = Production(number, head, tuple(body))
        grammar.by_head.setdefault(head, []).append(number)

    if not grammar.augmented_start:
        raise ValueError("grammar names no augmented start symbol")
    if grammar.augmented_start not in grammar.by_head:
        raise ValueError(
            f"augmented start symbol {grammar.augmented_start!r} has no production"
        )
    return grammar


def load_grammar(path: str | Path) -> Grammar:
    """Read and parse a grammar description file."""
    return parse_grammar(Path(path).read_text(encoding="utf-8"))