"""In-memory model of parsed spreadsheet data.

A TabularDocument is an ordered list of sheets, each sheet an ordered list of
rows, each row an ordered mapping of column name to a typed Cell. Every object
here is immutable; pipeline stages build new documents instead of editing.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


class CellKind(Enum):
    """Closed set of value types a cell may hold."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    """A single typed spreadsheet value."""

    kind: CellKind
    value: Any = None

    @classmethod
    def text(cls, value: str) -> "Cell":
        return cls(CellKind.TEXT, value)

    @classmethod
    def number(cls, value: float) -> "Cell":
        return cls(CellKind.NUMBER, value)

    @classmethod
    def boolean(cls, value: bool) -> "Cell":
        return cls(CellKind.BOOLEAN, bool(value))

    @classmethod
    def date(cls, value: date) -> "Cell":
        return cls(CellKind.DATE, value)

    @classmethod
    def empty(cls) -> "Cell":
        return cls(CellKind.EMPTY, None)

    @classmethod
    def from_python(cls, value: Any) -> "Cell":
        """Wrap a raw value produced by a spreadsheet engine.

        Handles plain Python scalars as well as numpy scalars and pandas
        Timestamps (anything exposing ``item()`` or ``to_pydatetime()``).

        Args:
            value: Raw value

        Returns:
            Cell of the matching kind
        """
        if isinstance(value, Cell):
            return value
        if value is None:
            return cls.empty()
        if hasattr(value, "to_pydatetime"):
            if value != value:  # NaT
                return cls.empty()
            return cls.date(value.to_pydatetime())
        if hasattr(value, "item") and not isinstance(value, (str, bytes)):
            value = value.item()
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, (datetime, date, time)):
            return cls.date(value)
        if isinstance(value, int):
            return cls.number(value)
        if isinstance(value, float):
            if math.isnan(value):
                return cls.empty()
            if value.is_integer():
                return cls.number(int(value))
            return cls.number(value)
        if isinstance(value, str):
            return cls.text(value)
        return cls.text(str(value))

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_translatable(self) -> bool:
        """Only non-blank text is ever sent to a translator."""
        return self.kind is CellKind.TEXT and bool(self.value.strip())

    def display(self) -> str:
        """Render the value as a spreadsheet would show it."""
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.BOOLEAN:
            return "TRUE" if self.value else "FALSE"
        if self.kind is CellKind.DATE:
            return self.value.isoformat()
        return str(self.value)


class Row(Mapping):
    """Insertion-ordered, read-only mapping of column name to Cell."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Optional[Iterable[Tuple[str, Any]]] = None):
        items = cells.items() if isinstance(cells, Mapping) else (cells or ())
        self._cells: Dict[str, Cell] = {
            str(key): Cell.from_python(value) for key, value in items
        }

    def __getitem__(self, key: str) -> Cell:
        return self._cells[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return list(self._cells.items()) == list(other._cells.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._cells.items()))

    def __repr__(self) -> str:
        return f"Row({self._cells!r})"

    def with_values(self, updates: Mapping) -> "Row":
        """Return a new Row with ``updates`` applied.

        Existing keys keep their position; new keys are appended in the order
        given.
        """
        merged = dict(self._cells)
        for key, value in updates.items():
            merged[key] = Cell.from_python(value)
        return Row(merged)

    def to_dict(self) -> Dict[str, Any]:
        """Plain ``{column: raw value}`` view of the row."""
        return {key: cell.value for key, cell in self._cells.items()}


@dataclass(frozen=True)
class Sheet:
    """A named table within a document."""

    name: str
    rows: Tuple[Row, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(self.rows))

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def columns(self) -> List[str]:
        """Union of row keys in first-encounter order."""
        seen: Dict[str, None] = {}
        for row in self.rows:
            for key in row:
                seen.setdefault(key, None)
        return list(seen)


@dataclass(frozen=True)
class TabularDocument:
    """Ordered collection of sheets parsed from one file."""

    sheets: Tuple[Sheet, ...] = ()
    _index: Dict[str, int] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        sheets = tuple(self.sheets)
        index: Dict[str, int] = {}
        for position, sheet in enumerate(sheets):
            if sheet.name in index:
                raise ValueError(f"duplicate sheet name '{sheet.name}'")
            index[sheet.name] = position
        object.__setattr__(self, "sheets", sheets)
        object.__setattr__(self, "_index", index)

    def __iter__(self) -> Iterator[Sheet]:
        return iter(self.sheets)

    def __len__(self) -> int:
        return len(self.sheets)

    @property
    def sheet_names(self) -> List[str]:
        return [sheet.name for sheet in self.sheets]

    def sheet(self, name: str) -> Optional[Sheet]:
        position = self._index.get(name)
        return None if position is None else self.sheets[position]

    def cell_count(self) -> int:
        return sum(len(row) for sheet in self.sheets for row in sheet.rows)

    def translatable_cell_count(self) -> int:
        return sum(
            1
            for sheet in self.sheets
            for row in sheet.rows
            for cell in row.values()
            if cell.is_translatable
        )


@dataclass(frozen=True)
class GroupEntry:
    """One translated value collected under a language group key."""

    row_index: int
    value: str

    def __str__(self) -> str:
        return f'"{self.row_index}": "{self.value}"'
