"""Table builder — homogeneous sequences as header/row data.

Cells are flat: a cell shows ``str(value)`` and never recurses into
structural rendering. Links are attached wherever a value is ``Linkable``:
the row element gets a row link, and each field value independently gets a
cell link.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from autoview.codec import link_href
from autoview.errors import InvalidRowShape
from autoview.schema import Shape, is_record, is_record_type, shape_of


@dataclass(frozen=True, slots=True)
class TableCell:
    text: str
    href: str | None = None


@dataclass(frozen=True, slots=True)
class TableRow:
    cells: tuple[TableCell, ...]
    href: str | None = None


@dataclass(frozen=True, slots=True)
class TableData:
    """Headers and rows for ``table.html``."""

    headers: tuple[str, ...]
    rows: tuple[TableRow, ...]

    @property
    def has_row_links(self) -> bool:
        return any(row.href is not None for row in self.rows)


def build_table(
    sequence: Sequence[Any],
    element_type: type | None = None,
    *,
    placeholder: str = "N/A",
) -> TableData:
    """Build table data from *sequence*.

    The element shape comes from *element_type* when known (so empty
    sequences still get headers), otherwise from the first element.

    Raises:
        InvalidRowShape: If an element is not a dataclass instance of the
            table's shape.
    """
    shape: Shape | None = None
    if element_type is not None and is_record_type(element_type):
        shape = shape_of(element_type)

    rows: list[TableRow] = []
    for element in sequence:
        if not is_record(element):
            msg = f"table row must be a dataclass instance, got {type(element).__name__}"
            raise InvalidRowShape(msg)
        if shape is None:
            shape = shape_of(type(element))
        elif not isinstance(element, shape.cls):
            msg = f"table row of type {type(element).__name__} in a table of {shape.name}"
            raise InvalidRowShape(msg)
        rows.append(_build_row(element, shape, placeholder))

    if shape is None:
        return TableData(headers=(), rows=())
    return TableData(
        headers=tuple(spec.name for spec in shape.table_fields),
        rows=tuple(rows),
    )


def _build_row(element: Any, shape: Shape, placeholder: str) -> TableRow:
    # A row of a subclass still renders the columns of the declared shape.
    cells: list[TableCell] = []
    for spec in shape.table_fields:
        value = getattr(element, spec.name)
        text = placeholder if value is None else str(value)
        cells.append(TableCell(text=text, href=link_href(value)))
    return TableRow(cells=tuple(cells), href=link_href(element))
