from lectic.context import Context
from lectic.next_closure import next_closure, lectic_closures
from lectic.concepts import Concept, concepts, iter_concepts, rank
from lectic.lattice import ConceptQueue, Lattice, Node
from lectic.implications import Implication, canonical_basis, preclosure, holds
from lectic.exploration import (
    Counterexample, InvalidCounterexample, QueryLimitExceeded,
    create_explorer, explore, confirm_all, context_oracle,
)
from lectic.table import MalformedTableError, parse_table, read_table, render
