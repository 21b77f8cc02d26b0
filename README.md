# lalrgen

`lalrgen` reads a context-free grammar written in a small plain-text format
and builds its LALR(1) automaton and parsing table. Along the way it computes
the FIRST and FOLLOW sets of the nonterminals and records any shift/reduce
and reduce/reduce conflicts it meets while filling the table.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Grammar files

A grammar file is a sequence of whitespace-separated tokens grouped into four
sections:

| Section         | Contents                                                        |
|-----------------|-----------------------------------------------------------------|
| `#1b` … `#1e`   | the nonterminals, including the augmented start symbol          |
| `#2b` … `#2e`   | the terminals, including the end-of-input marker `$`            |
| `#3b` … `#3e`   | the augmented start symbol, then the original start symbol      |
| `#4b` … `#4e`   | the productions, one per `#b` … `#e` block                      |

Inside a production block the first token is the head. The symbols after it
are read as nonterminals until `$2` switches to terminals; `$1` switches
back to nonterminals. A block with only a head is an empty production.
Productions are numbered from 1 in the order they appear. The augmented start
symbol must have a production, and the terminals must include `$`; otherwise
a `ValueError` is raised.

```
#1b S' S A #1e
#2b a b $ #2e
#3b S' S #3e
#4b
#b S' S #e
#b S A A #e
#b A $2 a $1 A #e
#b A $2 b #e
#4e
```

## Command line

```
lalrgen grammar.txt
lalrgen grammar.txt -o table.csv
```

This builds the automaton for the grammar in `grammar.txt` and writes the
parsing table as CSV, to standard output or to the file given with
`-o`/`--output`. The header row lists the columns (terminals in sorted order,
then nonterminals in sorted order); each following row is one state. A cell
reads `m<n>` for a move to state `n` (a shift on a terminal, a goto on a
nonterminal), `r<n>` for a reduction by production `n`, `A` for accept and
`ERR` for an error entry.

Conflicts are reported on standard error, one line each prefixed `ERROR:`;
the table keeps the entry that was there first. If the grammar file cannot be
read or is not valid, the command prints the error and exits with status 1.

## Library use

```python
from lalrgen.grammar import load_grammar
from lalrgen.automaton import LALRAutomaton

grammar = load_grammar("grammar.txt")
first = grammar.first_sets()
follow = grammar.follow_sets(first)
print(first["S"])    # {'a', 'b'}
print(follow["A"])   # {'$', 'a', 'b'}

automaton = LALRAutomaton.from_file("grammar.txt")
item = automaton.action(0, "a")
print(item.action, item.target)
print(automaton.conflicts)      # list of Conflict records
```

Grammars can also be parsed from a string with `parse_grammar(text)`.
`LALRAutomaton(grammar)` takes a `Grammar` directly; besides `action()`, it
exposes `table`, `columns`, `states` (the automaton as a `Digraph`),
`start`, `accept`, `first`, `follow` and `conflicts`. In FIRST sets the
empty string `""` stands for the empty word.

The modules:

- `lalrgen.grammar`: `Symbol`, `Production`, `Grammar` (with `first_sets`,
  `follow_sets`, `first_of_sequence`), `parse_grammar`, `load_grammar`,
  `is_key_subset`
- `lalrgen.items`: `LALRState`, `ItemAttributes`, `closure_lr`,
  `closure_lalr`, `build_lr0_automaton`
- `lalrgen.automaton`: `LALRAutomaton`, `TableItem`, `Action`, `Conflict`,
  and `main`, the command-line entry point
- `lalrgen.digraph`: `Digraph`, a directed graph with at most one edge per
  vertex pair and a separate self-loop per vertex, which can be copied,
  merged and reversed
- `lalrgen.priority_queue`: `PriorityQueue`, a sorted queue, stable for equal
  keys, with positional removal
- `lalrgen.helpers`: `assign_indices` for numbering symbols, `unescape` for
  one- and two-character escape tokens, and small set-map utilities
  (`add_to_set_map`, `merge_set_maps`, `record_nested`)

## What it does not do

`lalrgen` only builds tables. It has no parser driver that runs a token
stream through the table, it does not generate parser source code, and it
does not resolve conflicts by precedence or associativity.