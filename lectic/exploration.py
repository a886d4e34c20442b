from __future__ import annotations

import logging
from typing import Callable, Generator, Optional

import attr
import funcy as fn

from lectic.context import Context
from lectic.implications import Implication, holds, next_premise, preclosure


__all__ = [
    'Counterexample', 'Oracle', 'Explorer', 'InvalidCounterexample',
    'QueryLimitExceeded', 'create_explorer', 'explore', 'confirm_all',
    'context_oracle',
]


logger = logging.getLogger(__name__)


@attr.frozen
class Counterexample:
    """An object refuting a proposed implication."""
    attributes: frozenset[str] = attr.ib(converter=frozenset)
    name: Optional[str] = None


# The oracle confirms an implication by returning None.
Response = Optional[Counterexample]
Oracle = Callable[[frozenset[str], frozenset[str]], Response]

# Yields implications to check, receives responses, returns the basis.
Explorer = Generator[Implication, Response, list[Implication]]


class InvalidCounterexample(ValueError):
    pass


class QueryLimitExceeded(RuntimeError):
    pass


def create_explorer(context: Context) -> Explorer:
    """Create an attribute exploration over `context`.

    Yields:
      Implications premise ⇒ conclusion (over attribute names) that hold
      in the current context but are not yet known to hold in general.

    Receives:
      None if the implication is accepted, otherwise a Counterexample.
      A counterexample is added to `context` as a new object that has
      the premise plus the given attributes, and the same premise is
      asked about again.

    Returns:
      The canonical basis of the final context, over attribute names.
    """
    base = range(len(context.attributes))
    everything = frozenset(base)

    basis: list[Implication] = []
    premise = frozenset()
    while premise != everything:
        while premise != (closure := context.close_attributes(premise)):
            question = Implication(premise, closure).map(context.attribute_names)
            logger.debug("asking %s", question)

            response = yield question

            if response is None:
                basis.append(Implication(premise, closure))
                break
            _add_counterexample(context, question, response, basis)

        premise = next_premise(base, premise, basis)
        if premise is None:
            break

    return [imp.map(context.attribute_names) for imp in basis]


def _add_counterexample(context: Context, question: Implication,
                        example: Counterexample,
                        basis: list[Implication]) -> None:
    attributes = example.attributes | question.premise
    if question.conclusion <= attributes:
        raise InvalidCounterexample(
            f"{sorted(example.attributes)} does not refute {question}"
        )

    # The new object must respect every implication accepted so far.
    row = context.attribute_indices(attributes & set(context.attributes))
    if preclosure(basis, row) != row:
        violated = [str(imp.map(context.attribute_names)) for imp in basis
                    if imp.premise <= row and not imp.conclusion <= row]
        raise InvalidCounterexample(
            f"{sorted(attributes)} violates accepted implications: "
            f"{'; '.join(violated)}"
        )
    name = context.add_object(attributes, name=example.name)
    logger.info("added counterexample %s to %s refuting %s",
                name, context, question)


def explore(
        context: Context,
        oracle: Oracle,
        query_limit: Optional[int] = None,
) -> tuple[list[Implication], Context]:
    """Run attribute exploration, asking `oracle` about each implication.

    Arguments:
      - context: Explored in place; counterexamples become new objects.
      - oracle: Called as oracle(premise, conclusion). Returns None to
        accept the implication or a Counterexample to refute it.
      - query_limit: Maximum number of oracle calls, unbounded if None.

    Returns:
      The canonical basis of the final context and the context itself.
    """
    explorer = create_explorer(context)
    queries = 0
    try:
        question = next(explorer)
        while True:
            if query_limit is not None and queries >= query_limit:
                explorer.close()
                raise QueryLimitExceeded(
                    f"Oracle asked {queries} times without finishing."
                )
            response = oracle(question.premise, question.conclusion)
            queries += 1
            question = explorer.send(response)
    except StopIteration as stop:
        return stop.value, context


def confirm_all(premise: frozenset[str], conclusion: frozenset[str]) -> Response:
    """Oracle accepting every implication."""
    return None


def context_oracle(reference: Context) -> Oracle:
    """Oracle answering from a (larger) reference context.

    Accepts implications that hold in `reference`. Otherwise returns the
    first object of `reference` violating the implication.
    """
    rows = reference.rows()
    known = set(reference.attributes)

    def oracle(premise: frozenset[str], conclusion: frozenset[str]) -> Response:
        if unknown := (premise | conclusion) - known:
            raise ValueError(
                f"Attributes unknown to the reference context: {sorted(unknown)}"
            )
        if holds(Implication(premise, conclusion), reference):
            return None
        name = fn.first(
            obj for obj, attrs in rows.items()
            if premise <= attrs and not conclusion <= attrs
        )
        return Counterexample(rows[name], name=name)

    return oracle
