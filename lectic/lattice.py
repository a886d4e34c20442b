from __future__ import annotations

import heapq
from functools import cmp_to_key
from itertools import count
from typing import Any, Callable, Iterable, Iterator, Sequence

import attr
import funcy as fn
import networkx as nx
from hasse import PoSet

from lectic.concepts import Concept, iter_concepts, rank
from lectic.context import Context


__all__ = ['ConceptQueue', 'Node', 'Lattice']


Comparator = Callable[[Any, Any], int]


@attr.s(auto_detect=True, auto_attribs=True)
class ConceptQueue:
    """Max-priority queue ordered by an injected comparator.

    Items that compare equal pop in insertion order.
    """
    compare: Comparator = rank

    # Internal State
    heap: list = attr.ib(factory=list)
    counter: Iterator[int] = attr.ib(factory=count)

    def __attrs_post_init__(self) -> None:
        # Reversed so heapq's min-heap pops the highest ranked item.
        self._key = cmp_to_key(lambda x, y: self.compare(y, x))

    def push(self, item: Any) -> None:
        heapq.heappush(self.heap, (self._key(item), next(self.counter), item))

    def pop(self) -> Any:
        return heapq.heappop(self.heap)[-1]

    def __len__(self) -> int:
        return len(self.heap)

    @staticmethod
    def from_items(items: Iterable[Any], compare: Comparator = rank) -> ConceptQueue:
        queue = ConceptQueue(compare)
        for item in items:
            queue.push(item)
        return queue


@attr.frozen
class Node:
    concept: Concept
    lower_covers: tuple[int, ...] = attr.ib(converter=tuple, default=())


@attr.frozen
class Lattice:
    """Concept lattice as a list of nodes with their direct lower covers.

    Nodes are stored most specific first, so every lower cover index
    points at an earlier node.
    """
    nodes: tuple[Node, ...] = attr.ib(converter=tuple)

    @staticmethod
    def from_concepts(
            concepts: Iterable[Concept],
            compare: Comparator = rank) -> Lattice:
        """Build the lattice from concepts in any order; repeats are dropped."""
        queue = ConceptQueue.from_items(fn.ldistinct(concepts), compare)
        nodes: list[Node] = []

        while queue:
            concept = queue.pop()

            below = [i for i, node in enumerate(nodes)
                     if concept.intent <= node.concept.intent]
            reachable = set()
            for i in below:
                reachable.update(nodes[i].lower_covers)
            covers = [i for i in below if i not in reachable]

            nodes.append(Node(concept, covers))

        return Lattice(nodes)

    @staticmethod
    def from_context(context: Context) -> Lattice:
        return Lattice.from_concepts(iter_concepts(context))

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        yield from self.nodes

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    @property
    def concepts(self) -> Sequence[Concept]:
        return [node.concept for node in self.nodes]

    @property
    def edges(self) -> list[tuple[int, int]]:
        """Covering pairs (lower, upper) as node indices."""
        return [(lower, upper) for upper, node in enumerate(self.nodes)
                for lower in node.lower_covers]

    @property
    def poset(self) -> PoSet:
        """Hasse diagram over node indices, edges point towards the top."""
        graph = nx.DiGraph()
        graph.add_nodes_from(range(len(self.nodes)))
        graph.add_edges_from(self.edges)
        return PoSet(graph)

    def upper_covers(self, index: int) -> list[int]:
        return [upper for lower, upper in self.edges if lower == index]

    @property
    def top(self) -> Node:
        """The most general concept (largest extent)."""
        if not self.nodes:
            raise ValueError("Lattice has no concepts.")
        return self.nodes[-1]

    @property
    def bottom(self) -> Node:
        """The most specific concept (largest intent)."""
        if not self.nodes:
            raise ValueError("Lattice has no concepts.")
        return self.nodes[0]
