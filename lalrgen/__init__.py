"""Build LALR(1) automata, parsing tables and FIRST/FOLLOW sets from plain-text grammars."""

__version__ = "0.1.0"