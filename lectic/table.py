"""Reading contexts from CSV tables and rendering them as text grids.

Table layout: the header row holds an ignored first cell followed by the
attribute names. Each data row holds the object name (numbered from 1 if
blank) followed by one cell per attribute; "X" (trimmed, any case) marks
a cross.
"""
from __future__ import annotations

import csv
import io
import logging
import os
from typing import Union

import numpy as np

from lectic.context import Context


__all__ = ['MalformedTableError', 'parse_table', 'read_table', 'render']


logger = logging.getLogger(__name__)


class MalformedTableError(ValueError):
    pass


def parse_table(text: str, delimiter: str = ',') -> Context:
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    rows = [(reader.line_num, row) for row in reader if row]
    if not rows:
        raise MalformedTableError("Table has no header row.")

    (_, header), *records = rows
    attributes = [cell.strip() for cell in header[1:]]

    objects, incidence = [], []
    for line, record in records:
        if len(record) != len(header):
            raise MalformedTableError(
                f"Line {line}: found record with {len(record)} fields, "
                f"header has {len(header)}."
            )
        name, *cells = record
        objects.append(name.strip() or str(len(objects) + 1))
        incidence.append([cell.strip().upper() == 'X' for cell in cells])

    try:
        context = Context(
            objects,
            attributes,
            np.array(incidence, dtype=bool).reshape(len(objects), len(attributes)),
        )
    except ValueError as err:
        raise MalformedTableError(str(err)) from err

    logger.info("parsed table with %d objects and %d attributes",
                len(objects), len(attributes))
    return context


def read_table(path: Union[str, os.PathLike], delimiter: str = ',') -> Context:
    try:
        with open(path, newline='', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as err:
        raise MalformedTableError(f"Cannot read table {path}: {err}") from err
    return parse_table(text, delimiter=delimiter)


def render(context: Context) -> str:
    """Fixed-width grid: header line, then one line per object."""
    lines = ['  ' + ''.join(f"| {a} " for a in context.attributes)]
    for obj, row in zip(context.objects, context.incidence):
        cells = ''.join('| X ' if cell else '|   ' for cell in row)
        lines.append(f"{obj} {cells}")
    return '\n'.join(lines)
