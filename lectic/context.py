from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

import attr
import funcy as fn
import numpy as np


__all__ = ['Context', 'Indices']


Indices = frozenset[int]


def _intern(names: Iterable[str], kind: str) -> dict[str, int]:
    index = {}
    for i, name in enumerate(names):
        if name in index:
            raise ValueError(f"Duplicate {kind} name: {name!r}")
        index[name] = i
    return index


@attr.s(auto_attribs=True, eq=False, repr=False)
class Context:
    """Formal context: objects × attributes with a boolean incidence grid.

    Names are interned to row/column positions once. All derivation work is
    done over index sets; names only appear at the public boundary.

    Any unknown name passed to a name-level query makes the query return
    None. An empty input derives to the whole opposite domain.
    """
    _objects: list[str] = attr.ib(converter=list)
    _attributes: tuple[str, ...] = attr.ib(converter=tuple)
    _incidence: np.ndarray = attr.ib(
        converter=lambda x: np.array(x, dtype=bool)
    )

    _object_index: dict[str, int] = attr.ib(init=False)
    _attribute_index: dict[str, int] = attr.ib(init=False)

    def __attrs_post_init__(self) -> None:
        self._object_index = _intern(self._objects, 'object')
        self._attribute_index = _intern(self._attributes, 'attribute')

        shape = (len(self._objects), len(self._attributes))
        if self._incidence.size == 0:
            self._incidence = self._incidence.reshape(shape)
        if self._incidence.shape != shape:
            raise ValueError(
                f"Incidence grid has shape {self._incidence.shape}, "
                f"expected {shape}."
            )

    # ===================== Constructors =======================

    @staticmethod
    def empty(n_objects: int, n_attributes: int) -> Context:
        """Context with objects "1".."n", attributes "1".."m", no crosses."""
        return Context(
            objects=[str(i) for i in range(1, n_objects + 1)],
            attributes=[str(i) for i in range(1, n_attributes + 1)],
            incidence=np.zeros((n_objects, n_attributes), dtype=bool),
        )

    @staticmethod
    def from_relation(
            pairs: Iterable[tuple[str, str]],
            objects: Optional[Sequence[str]] = None,
            attributes: Optional[Sequence[str]] = None) -> Context:
        """Build a context from (object, attribute) pairs.

        If objects or attributes are not supplied they are taken from the
        relation in order of first appearance.
        """
        pairs = list(pairs)
        if objects is None:
            objects = fn.ldistinct(o for o, _ in pairs)
        if attributes is None:
            attributes = fn.ldistinct(a for _, a in pairs)

        ctx = Context(objects, attributes, np.zeros(
            (len(objects), len(attributes)), dtype=bool
        ))
        for obj, att in pairs:
            if obj not in ctx._object_index:
                raise ValueError(f"Unknown object in relation: {obj!r}")
            if att not in ctx._attribute_index:
                raise ValueError(f"Unknown attribute in relation: {att!r}")
            ctx._incidence[ctx._object_index[obj], ctx._attribute_index[att]] = True
        return ctx

    # ======================= Views ============================

    @property
    def objects(self) -> tuple[str, ...]:
        return tuple(self._objects)

    @property
    def attributes(self) -> tuple[str, ...]:
        return self._attributes

    @property
    def shape(self) -> tuple[int, int]:
        return self._incidence.shape

    @property
    def incidence(self) -> np.ndarray:
        grid = self._incidence.copy()
        grid.flags.writeable = False
        return grid

    def rows(self) -> dict[str, frozenset[str]]:
        """Map each object to the set of its attributes."""
        return {
            obj: frozenset(self.attribute_names(np.flatnonzero(row)))
            for obj, row in zip(self._objects, self._incidence)
        }

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        n, m = self.shape
        return f"Context({n} objects × {m} attributes)"

    # ==================== Name interning ======================

    def object_indices(self, names: Iterable[str]) -> Optional[Indices]:
        return _lookup(self._object_index, names)

    def attribute_indices(self, names: Iterable[str]) -> Optional[Indices]:
        return _lookup(self._attribute_index, names)

    def object_names(self, indices: Iterable[int]) -> tuple[str, ...]:
        return tuple(self._objects[i] for i in sorted(indices))

    def attribute_names(self, indices: Iterable[int]) -> tuple[str, ...]:
        return tuple(self._attributes[i] for i in sorted(indices))

    # ================ Index-level derivations =================

    def derive_objects(self, objects: Indices) -> Indices:
        """Attributes (indices) shared by all given objects."""
        if not objects:
            return frozenset(range(len(self._attributes)))
        rows = self._incidence[sorted(objects)]
        return frozenset(np.flatnonzero(rows.all(axis=0)).tolist())

    def derive_attributes(self, attributes: Indices) -> Indices:
        """Objects (indices) having all given attributes."""
        if not attributes:
            return frozenset(range(len(self._objects)))
        cols = self._incidence[:, sorted(attributes)]
        return frozenset(np.flatnonzero(cols.all(axis=1)).tolist())

    def close_attributes(self, attributes: Indices) -> Indices:
        return self.derive_objects(self.derive_attributes(attributes))

    def close_objects(self, objects: Indices) -> Indices:
        return self.derive_attributes(self.derive_objects(objects))

    # ================= Name-level derivations =================

    def intents(self, objects: Iterable[str]) -> Optional[tuple[str, ...]]:
        """Attributes common to all named objects (the derivation ′)."""
        if (idx := self.object_indices(objects)) is None:
            return None
        return self.attribute_names(self.derive_objects(idx))

    def extents(self, attributes: Iterable[str]) -> Optional[tuple[str, ...]]:
        """Objects having all named attributes (the dual derivation ′)."""
        if (idx := self.attribute_indices(attributes)) is None:
            return None
        return self.object_names(self.derive_attributes(idx))

    def closure_intents(self, objects: Iterable[str]) -> Optional[tuple[str, ...]]:
        if (idx := self.object_indices(objects)) is None:
            return None
        return self.object_names(self.close_objects(idx))

    def closure_extents(self, attributes: Iterable[str]) -> Optional[tuple[str, ...]]:
        if (idx := self.attribute_indices(attributes)) is None:
            return None
        return self.attribute_names(self.close_attributes(idx))

    def object_has_attribute(self, obj: str, attribute: str) -> Optional[bool]:
        i = self._object_index.get(obj)
        j = self._attribute_index.get(attribute)
        if i is None or j is None:
            return None
        return bool(self._incidence[i, j])

    # ======================= Mutation =========================

    def add_object(self, attributes: Iterable[str], name: Optional[str] = None) -> str:
        """Append one object row and return its name.

        The row has a cross exactly at the named attributes; names outside
        the attribute domain are ignored. Without a name, the next free
        integer (as text) is used.
        """
        if name is None:
            name = _next_free_number(self._object_index, len(self._objects) + 1)
        elif name in self._object_index:
            raise ValueError(f"Duplicate object name: {name!r}")

        attributes = set(attributes)
        row = np.array([a in attributes for a in self._attributes], dtype=bool)
        assert row.shape == (self._incidence.shape[1],), "row width mismatch"

        self._incidence = np.vstack([self._incidence, row[None, :]])
        self._object_index[name] = len(self._objects)
        self._objects.append(name)
        return name

    def copy(self) -> Context:
        return Context(self._objects, self._attributes, self._incidence.copy())


def _lookup(index: dict[str, int], names: Iterable[str]) -> Optional[Indices]:
    found = set()
    for name in names:
        if (i := index.get(name)) is None:
            return None
        found.add(i)
    return frozenset(found)


def _next_free_number(taken: dict[str, Any], start: int) -> str:
    return fn.first(
        str(i) for i in fn.count(start) if str(i) not in taken
    )
