from itertools import chain, combinations

import pytest

from lectic.table import parse_table


WATERS = """\
,running,artificial,small
pond,,X,X
river,x,,
canal,X,X,
"""

# 10 objects × 6 attributes.
TRIANGLES = """\
,a,b,c,d,e,f
1, ,x,x, ,x,x
2, ,x,x, , ,
3, , , , , ,
4, , , , ,x,x
5, , ,x, ,x,x
6, ,x, , , ,
7, , ,x, ,x,x
8, , ,x,x, ,x
9, , ,x, ,x,x
10, ,x,x,x,x,x
"""

# 7 objects × 5 attributes, 10 concepts.
SEVEN = """\
,a,b,c,d,e
1,,X,,X,
2,,X,,,X
3,,,X,,
4,X,X,X,,
5,,,,X,
6,,X,X,,
7,,,,,X
"""


def powerset(elems):
    elems = list(elems)
    return chain.from_iterable(
        combinations(elems, k) for k in range(len(elems) + 1)
    )


@pytest.fixture
def waters():
    return parse_table(WATERS)


@pytest.fixture
def triangles():
    return parse_table(TRIANGLES)


@pytest.fixture
def seven():
    return parse_table(SEVEN)
