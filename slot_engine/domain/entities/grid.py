"""Reel grid entity"""
from typing import List, Sequence, Tuple

from slot_engine.domain.entities.symbols import Symbol

GRID_COLUMNS = 3
GRID_ROWS = 3


class Grid:
    """Immutable column-major matrix of symbols: ``columns[column][row]``"""

    __slots__ = ("_columns",)

    def __init__(self, columns: Sequence[Sequence[Symbol]]):
        self._columns: Tuple[Tuple[Symbol, ...], ...] = tuple(tuple(column) for column in columns)
        if not self._columns or len({len(column) for column in self._columns}) != 1:
            raise ValueError("Grid columns must be non-empty and of equal height")

    @property
    def columns(self) -> Tuple[Tuple[Symbol, ...], ...]:
        return self._columns

    @property
    def width(self) -> int:
        return len(self._columns)

    @property
    def height(self) -> int:
        return len(self._columns[0])

    def cell(self, column: int, row: int) -> Symbol:
        return self._columns[column][row]

    def to_list(self) -> List[List[str]]:
        """Column-major glyph matrix for clients"""
        return [[symbol.glyph for symbol in column] for column in self._columns]

    def to_names(self) -> List[List[str]]:
        return [[symbol.name for symbol in column] for column in self._columns]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Symbol]]) -> 'Grid':
        """Build from row-major input, as a grid is usually written down"""
        return cls(list(zip(*rows)))

    def __eq__(self, other) -> bool:
        return isinstance(other, Grid) and self._columns == other._columns

    def __hash__(self) -> int:
        return hash(self._columns)

    def __repr__(self) -> str:
        return f"Grid({self.to_names()!r})"
