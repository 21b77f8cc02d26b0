"""Directed graph whose vertices and edges carry arbitrary data."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Generic, TypeVar

V = TypeVar("V")
E = TypeVar("E")


class Digraph(Generic[V, E]):
    """A directed graph with at most one edge per ordered vertex pair.

    Each vertex may also hold a single self-loop, kept apart from its
    ordinary out- and in-edges. Edge data is shared between the out-edge
    view of the tail and the in-edge view of the head.
    """

    def __init__(self) -> None:
        self._data: list[V] = []
        self._loops: dict[int, E] = {}
        self._out: list[dict[int, E]] = []
        self._in: list[dict[int, E]] = []

    def __len__(self) -> int:
        return len(self._data)

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._data):
            raise IndexError(f"no vertex with index {index}")

    def add_vertex(self, data: V) -> int:
        """Append a vertex holding ``data`` and return its index."""
        self._data.append(data)
        self._out.append({})
        self._in.append({})
        return len(self._data) - 1

    def add_edge(self, tail: int, head: int, data: E) -> bool:
        """Add an edge from ``tail`` to ``head``.

        A self-loop replaces any existing one and always succeeds. For any
        other pair, returns False and leaves the graph unchanged if the edge
        already exists.
        """
        self._check(tail)
        self._check(head)
        if tail == head:
            self._loops[tail] = data
            return True
        if head in self._out[tail]:
            return False
        self._out[tail][head] = data
        self._in[head][tail] = data
        return True

    def vertex_data(self, index: int) -> V:
        """Return the data stored on vertex ``index``."""
        self._check(index)
        return self._data[index]

    def self_loop(self, index: int) -> Any:
        """Return the data of the self-loop on ``index``, or None if it has none."""
        self._check(index)
        return self._loops.get(index)

    def out_edges(self, index: int) -> list[tuple[int, E]]:
        """Return ``(head, data)`` pairs of edges leaving ``index``, ordered by head."""
        self._check(index)
        return sorted(self._out[index].items(), key=lambda item: item[0])

    def in_edges(self, index: int) -> list[tuple[int, E]]:
        """Return ``(tail, data)`` pairs of edges entering ``index``, ordered by tail."""
        self._check(index)
        return sorted(self._in[index].items(), key=lambda item: item[0])

    def copy(self) -> Digraph[V, E]:
        """Return a deep copy of the graph, vertex and edge data included."""
        result: Digraph[V, E] = Digraph()
        for data in self._data:
            result.add_vertex(deepcopy(data))
        for index, loop in self._loops.items():
            result._loops[index] = deepcopy(loop)
        for tail, edges in enumerate(self._out):
            for head, data in edges.items():
                result.add_edge(tail, head, deepcopy(data))
        return result

    def merge(self, other: Digraph[V, E], copy: bool) -> Digraph[V, E] | None:
        """Append a copy of ``other`` after this graph's vertices.

        With ``copy`` true, this graph is left alone and the merged graph is
        returned; otherwise the copy is merged in place and None is returned.
        """
        target = self.copy() if copy else self
        addition = other.copy()
        offset = len(target)
        for data in addition._data:
            target.add_vertex(data)
        for index, loop in addition._loops.items():
            target._loops[index + offset] = loop
        for tail, edges in enumerate(addition._out):
            for head, data in edges.items():
                target.add_edge(tail + offset, head + offset, data)
        return target if copy else None

    def reverse(self) -> None:
        """Turn every edge around in place; self-loops are unaffected."""
        self._out, self._in = self._in, self._out