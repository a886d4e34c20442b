from __future__ import annotations

from typing import Callable, Hashable, Iterable, Iterator, Optional, Sequence

import funcy as fn


__all__ = ['Closure', 'next_closure', 'lectic_closures', 'lectic_key',
           'lectic_lt']


Elem = Hashable
Closure = Callable[[frozenset], Optional[frozenset]]


def next_closure(
        base: Sequence[Elem],
        closed: Iterable[Elem],
        closure: Closure) -> Optional[frozenset]:
    """Ganter's Next-Closure: lectically next closed set after `closed`.

    The base set is totally ordered by position. Returns None when
    `closed` is the lectic maximum.

    Works with any closure operator over subsets of `base`, e.g., the
    double derivation of a context or the preclosure of an implication
    set.
    """
    current = set(closed)
    for i in reversed(range(len(base))):
        elem = base[i]
        if elem in current:
            current.remove(elem)
            continue

        # Here current == closed ∩ base[:i].
        candidate = closure(frozenset(current | {elem}))
        assert candidate is not None, \
            f"closure rejected candidate built from the base: {elem!r}"

        prefix = set(base[:i])
        if (candidate & prefix) == current:
            return candidate
    return None


def lectic_closures(
        base: Sequence[Elem],
        closure: Closure,
        start: Optional[Iterable[Elem]] = None) -> Iterator[frozenset]:
    """Lazily enumerate closed sets in lectic order.

    Starts at `start` (default: closure of the empty set) and ends at the
    lectic maximum.
    """
    if start is None:
        start = closure(frozenset())
    step = lambda closed: next_closure(base, closed, closure)
    return fn.takewhile(fn.notnone, fn.iterate(step, frozenset(start)))


def lectic_key(base: Sequence[Elem], subset: Iterable[Elem]) -> tuple[bool, ...]:
    """Sort key realizing lectic order over subsets of `base`.

    Sets are compared at the first position where they differ; the set
    containing that element is larger.
    """
    subset = set(subset)
    return tuple(elem in subset for elem in base)


def lectic_lt(base: Sequence[Elem], left: Iterable[Elem], right: Iterable[Elem]) -> bool:
    return lectic_key(base, left) < lectic_key(base, right)
