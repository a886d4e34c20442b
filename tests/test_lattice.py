import pytest
from hasse import PoSet

from lectic.concepts import Concept, concepts, rank
from lectic.context import Context
from lectic.lattice import ConceptQueue, Lattice, Node


def C(extent, intent):
    return Concept(set(extent.split()), set(intent))


# Same concepts as the seven object context, in no particular order.
UNORDERED = [
    C('1 5', 'd'),
    C('1 2 3 4 5 6 7', ''),
    C('1 2 4 6', 'b'),
    C('2 7', 'e'),
    C('2', 'be'),
    C('3 4 6', 'c'),
    C('1', 'bd'),
    C('', 'abcde'),
    C('4', 'abc'),
    C('4 6', 'bc'),
]


def test_queue_pops_most_specific_first():
    queue = ConceptQueue.from_items(UNORDERED)
    popped = [''.join(sorted(queue.pop().intent)) for _ in range(len(UNORDERED))]
    assert popped == [
        'abcde', 'abc', 'be', 'bd', 'bc', 'd', 'e', 'c', 'b', '',
    ]
    assert len(queue) == 0


def test_queue_with_injected_comparator():
    queue = ConceptQueue.from_items([3, 1, 2], compare=lambda x, y: x - y)
    assert [queue.pop() for _ in range(3)] == [3, 2, 1]

    queue = ConceptQueue.from_items(['b', 'a', 'c'], compare=lambda x, y: 0)
    assert [queue.pop() for _ in range(3)] == ['b', 'a', 'c']


def test_from_concepts():
    lattice = Lattice.from_concepts(UNORDERED)
    assert list(lattice) == [
        Node(C('', 'abcde'), []),
        Node(C('4', 'abc'), [0]),
        Node(C('2', 'be'), [0]),
        Node(C('1', 'bd'), [0]),
        Node(C('4 6', 'bc'), [1]),
        Node(C('1 5', 'd'), [3]),
        Node(C('2 7', 'e'), [2]),
        Node(C('3 4 6', 'c'), [4]),
        Node(C('1 2 4 6', 'b'), [2, 3, 4]),
        Node(C('1 2 3 4 5 6 7', ''), [5, 6, 7, 8]),
    ]
    assert lattice.bottom.concept == C('', 'abcde')
    assert lattice.top.concept == C('1 2 3 4 5 6 7', '')
    assert lattice.upper_covers(0) == [1, 2, 3]
    assert lattice.upper_covers(9) == []


def test_from_context(seven):
    lattice = Lattice.from_context(seven)
    assert len(lattice) == 10
    assert set(lattice.concepts) == set(UNORDERED)


def covers_are_transitive_reduction(lattice):
    nodes = lattice.concepts
    for upper, node in enumerate(lattice):
        assert all(lower < upper for lower in node.lower_covers)
        assert all(nodes[lower].intent > node.concept.intent
                   for lower in node.lower_covers)

    # Full specificity order, reduced independently.
    order = [(i, j) for i, x in enumerate(nodes) for j, y in enumerate(nodes)
             if x.intent > y.intent]
    expected = PoSet.from_chains(*order)
    assert set(lattice.poset.hasse.edges) == set(expected.hasse.edges)
    assert set(lattice.edges) == set(expected.hasse.edges)


def test_transitive_reduction(triangles, seven, waters):
    for context in (triangles, seven, waters):
        covers_are_transitive_reduction(Lattice.from_context(context))


def test_ranking_is_linear_extension(triangles):
    found = concepts(triangles)
    for x in found:
        for y in found:
            if x.intent < y.intent:
                assert rank(x, y) < 0


def test_poset_compare(seven):
    lattice = Lattice.from_context(seven)
    poset = lattice.poset
    assert len(poset) == 10
    assert poset.compare(0, 9) == '<'
    assert poset.compare(9, 0) == '>'
    assert poset.compare(2, 3) == '||'


def test_single_node():
    lattice = Lattice.from_context(Context(['1'], ['a'], [[True]]))
    assert len(lattice) == 1
    assert lattice[0] == Node(Concept({'1'}, {'a'}))
    assert lattice.edges == []
    assert list(lattice.poset) == [0]


def test_repeated_concepts_are_dropped():
    lattice = Lattice.from_concepts(UNORDERED + UNORDERED[::-1])
    assert len(lattice) == 10
    covers_are_transitive_reduction(lattice)


def test_empty_lattice():
    lattice = Lattice.from_concepts([])
    assert len(lattice) == 0
    with pytest.raises(ValueError):
        lattice.top
    with pytest.raises(ValueError):
        lattice.bottom
