from __future__ import annotations

import logging
from typing import Iterator

import attr

from lectic.context import Context
from lectic.next_closure import lectic_closures


__all__ = ['Concept', 'iter_concepts', 'concepts', 'rank']


logger = logging.getLogger(__name__)


@attr.frozen
class Concept:
    extent: frozenset[str] = attr.ib(converter=frozenset)
    intent: frozenset[str] = attr.ib(converter=frozenset)

    def is_subconcept_of(self, other: Concept) -> bool:
        """Specificity order: self ≤ other iff self's extent ⊆ other's."""
        return self.extent <= other.extent

    def __str__(self) -> str:
        extent = ', '.join(sorted(self.extent))
        intent = ', '.join(sorted(self.intent))
        return f"({{{extent}}}, {{{intent}}})"


def iter_concepts(context: Context) -> Iterator[Concept]:
    """Yield every formal concept of `context` in lectic order of intents.

    Lectic order is taken over the attributes in their context order.
    """
    base = range(len(context.attributes))
    for intent in lectic_closures(base, context.close_attributes):
        extent = context.derive_attributes(intent)
        concept = Concept(
            extent=context.object_names(extent),
            intent=context.attribute_names(intent),
        )
        logger.debug("concept %s", concept)
        yield concept


def concepts(context: Context) -> list[Concept]:
    return list(iter_concepts(context))


def rank(left: Concept, right: Concept) -> int:
    """Comparator linearizing concepts from general (low) to specific (high).

    Only used to drive lattice construction. Comparable concepts are
    ordered by inclusion; incomparable ones fall back to sizes, which
    carries no lattice meaning.
    """
    if left == right:
        return 0
    if left.intent <= right.intent:
        return -1
    if right.intent <= left.intent:
        return 1
    if left.extent <= right.extent:
        return 1
    if right.extent <= left.extent:
        return -1

    by_intent = len(left.intent) - len(right.intent)
    if by_intent:
        return -1 if by_intent < 0 else 1
    by_extent = len(right.extent) - len(left.extent)
    return (by_extent > 0) - (by_extent < 0)
