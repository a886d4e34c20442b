from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Iterable, Sequence

import attr

from lectic.context import Context
from lectic.next_closure import next_closure


__all__ = ['Implication', 'preclosure', 'canonical_basis', 'holds']


logger = logging.getLogger(__name__)


@attr.frozen
class Implication:
    """premise ⇒ conclusion, with the premise included in the conclusion."""
    premise: frozenset[Any] = attr.ib(converter=frozenset)
    conclusion: frozenset[Any] = attr.ib(converter=frozenset)

    def __attrs_post_init__(self) -> None:
        object.__setattr__(self, 'conclusion', self.conclusion | self.premise)

    @property
    def consequent(self) -> frozenset[Any]:
        """What the implication adds beyond its premise."""
        return self.conclusion - self.premise

    def map(self, func: Callable[[Iterable[Any]], Iterable[Any]]) -> Implication:
        return Implication(func(self.premise), func(self.conclusion))

    def __str__(self) -> str:
        premise = ', '.join(map(str, sorted(self.premise)))
        consequent = ', '.join(map(str, sorted(self.consequent)))
        return f"{premise or '∅'} ⇒ {consequent or '∅'}"


def preclosure(implications: Sequence[Implication], attributes: Iterable[Any]) -> frozenset:
    """Saturate `attributes` under `implications`.

    Every implication fires at most once per call. The sequence itself is
    left untouched so it can be reused across calls.
    """
    closed = set(attributes)
    fired = set()
    while True:
        ready = [i for i, imp in enumerate(implications)
                 if i not in fired and imp.premise <= closed]
        if not ready:
            return frozenset(closed)
        for i in ready:
            closed |= implications[i].conclusion
            fired.add(i)


def next_premise(
        base: Sequence[Any],
        premise: frozenset,
        basis: Sequence[Implication]) -> frozenset | None:
    """Next candidate premise: Next-Closure against the basis so far."""
    return next_closure(base, premise, partial(preclosure, basis))


def canonical_basis(context: Context) -> list[Implication]:
    """Duquenne–Guigues basis of `context` over attribute names.

    Sound, complete and minimal. Implications are returned in lectic
    order of their premises.
    """
    base = range(len(context.attributes))
    everything = frozenset(base)

    basis: list[Implication] = []
    premise = frozenset()
    while premise != everything:
        closure = context.close_attributes(premise)
        if premise != closure:
            basis.append(Implication(premise, closure))
            logger.debug("pseudo-intent %s", basis[-1].map(context.attribute_names))

        premise = next_premise(base, premise, basis)
        if premise is None:
            break

    return [imp.map(context.attribute_names) for imp in basis]


def holds(implication: Implication, context: Context) -> bool:
    """True iff every object with the whole premise has the whole conclusion.

    Unknown attribute names never hold.
    """
    premise = context.attribute_indices(implication.premise)
    conclusion = context.attribute_indices(implication.conclusion)
    if premise is None or conclusion is None:
        return False
    return context.derive_attributes(premise) <= context.derive_attributes(conclusion)
