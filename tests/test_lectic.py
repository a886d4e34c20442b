import lectic
from lectic import Counterexample


def test_lectic_smoke():
    context = lectic.parse_table(
        ",running,artificial,small\n"
        "pond,,X,X\n"
        "river,X,,\n"
        "canal,X,X,\n"
    )
    assert len(lectic.concepts(context)) == 6
    assert len(lectic.Lattice.from_context(context)) == 6

    asked = []

    def oracle(premise, conclusion):
        asked.append((premise, conclusion))
        if premise == {'small'}:
            return Counterexample({'running'}, name='brook')
        return None

    basis, context = lectic.explore(context, oracle)
    assert asked == [({'small'}, {'small', 'artificial'})]
    assert basis == []
    assert context.objects[-1] == 'brook'
    assert len(lectic.concepts(context)) == 8


def test_public_surface():
    from lectic import exploration, lattice

    assert lectic.InvalidCounterexample is exploration.InvalidCounterexample
    assert lectic.QueryLimitExceeded is exploration.QueryLimitExceeded
    assert lectic.ConceptQueue is lattice.ConceptQueue
