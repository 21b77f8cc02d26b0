import csv

import pytest

from lalrgen.automaton import Action, LALRAutomaton, TableItem, main
from lalrgen.grammar import parse_grammar

DRAGON = """
#1b S' S L R #1e
#2b = * id $ #2e
#3b S' S #3e
#4b
#b S' S #e
#b S L $2 = $1 R #e
#b S R #e
#b L $2 * $1 R #e
#b L $2 id #e
#b R L #e
#4e
"""

AMBIGUOUS = """
#1b E' E #1e
#2b + id $ #2e
#3b E' E #3e
#4b
#b E' E #e
#b E E $2 + $1 E #e
#b E $2 id #e
#4e
"""

EPSILON = """
#1b S' S #1e
#2b a $ #2e
#3b S' S #3e
#4b
#b S' S #e
#b S $2 a $1 S #e
#b S #e
#4e
"""


def run(automaton, tokens):
    stack = [automaton.start]
    stream = list(tokens) + ["$"]
    position = 0
    while True:
        item = automaton.action(stack[-1], stream[position])
        if item.action is Action.SHIFT:
            stack.append(item.target)
            position += 1
        elif item.action is Action.REDUCE:
            production = automaton.grammar.productions[item.target]
            if production.body:
                del stack[-len(production.body):]
            goto = automaton.action(stack[-1], production.head)
            if goto.action is not Action.SHIFT:
                return False
            stack.append(goto.target)
        elif item.action is Action.ACCEPT:
            return True
        else:
            return False


@pytest.fixture
def dragon():
    return LALRAutomaton(parse_grammar(DRAGON))


def test_dragon_grammar_has_no_conflicts(dragon):
    assert dragon.conflicts == []
    assert len(dragon.table) == 10


def test_columns_are_terminals_then_nonterminals(dragon):
    assert dragon.columns[:4] == sorted(["=", "*", "id", "$"])
    assert dragon.columns[4:] == sorted(["S'", "S", "L", "R"])
    assert [dragon.symbol_index[s] for s in dragon.columns] == list(range(8))


def test_accept_entry(dragon):
    assert dragon.action(dragon.accept, "$") == TableItem(Action.ACCEPT)
    assert str(dragon.action(dragon.accept, "$")) == "A"
    assert dragon.action(dragon.start, "S") == TableItem(Action.SHIFT, dragon.accept)


@pytest.mark.parametrize(
    "tokens, accepted",
    [
        (["id"], True),
        (["id", "=", "id"], True),
        (["*", "id", "=", "*", "*", "id"], True),
        (["id", "="], False),
        (["=", "id"], False),
        ([], False),
    ],
)
def test_dragon_parses(dragon, tokens, accepted):
    assert run(dragon, tokens) is accepted


def test_shift_entries_follow_edges(dragon):
    for index in range(len(dragon.states)):
        for head, symbol in dragon.states.out_edges(index):
            assert dragon.action(index, symbol) == TableItem(Action.SHIFT, head)


def test_lalr_lookaheads_merge_for_reduce_of_l(dragon):
    reductions = {
        symbol
        for row in dragon.table
        for symbol, item in row.items()
        if item.action is Action.REDUCE
        and dragon.grammar.productions[item.target].head == "R"
    }
    assert reductions == {"=", "$"}


def test_ambiguous_grammar_reports_shift_reduce():
    automaton = LALRAutomaton(parse_grammar(AMBIGUOUS))
    assert automaton.conflicts
    conflict = automaton.conflicts[0]
    assert conflict.symbol == "+"
    assert conflict.kind == "shift-reduce"
    assert automaton.action(conflict.state, "+").action is Action.SHIFT
    assert run(automaton, ["id", "+", "id", "+", "id"]) is True


def test_empty_production():
    automaton = LALRAutomaton(parse_grammar(EPSILON))
    assert automaton.conflicts == []
    assert run(automaton, []) is True
    assert run(automaton, ["a", "a", "a"]) is True
    assert automaton.action(automaton.start, "$").action is Action.REDUCE


def test_unknown_symbol_and_state(dragon):
    with pytest.raises(KeyError):
        dragon.action(0, "missing")
    with pytest.raises(IndexError):
        dragon.action(len(dragon.table), "id")


def test_missing_end_marker_is_rejected():
    text = DRAGON.replace("id $ #2e", "id #2e")
    with pytest.raises(ValueError):
        LALRAutomaton(parse_grammar(text))


def test_from_file_and_main(tmp_path):
    path = tmp_path / "grammar.txt"
    path.write_text(DRAGON, encoding="utf-8")
    automaton = LALRAutomaton.from_file(path)
    assert automaton.conflicts == []

    out = tmp_path / "table.csv"
    assert main([str(path), "-o", str(out)]) == 0
    with out.open(newline="", encoding="utf-8") as stream:
        rows = list(csv.reader(stream))
    assert rows[0][1:] == automaton.columns
    assert len(rows) == len(automaton.table) + 1
    accept_row = rows[automaton.accept + 1]
    assert accept_row[1 + automaton.symbol_index["$"]] == "A"


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.txt")]) == 1