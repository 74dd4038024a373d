"""Pay-line catalog"""
from dataclasses import dataclass
from typing import List, Tuple

from slot_engine.domain.entities.grid import Grid
from slot_engine.domain.entities.symbols import Symbol

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class PayLine:
    """Ordered (column, row) coordinates checked for matching symbols"""

    index: int
    name: str
    coordinates: Tuple[Coordinate, ...]

    def symbols_on(self, grid: Grid) -> List[Symbol]:
        return [grid.cell(column, row) for column, row in self.coordinates]

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "name": self.name,
            "coordinates": [list(coordinate) for coordinate in self.coordinates],
        }


PAYLINES: Tuple[PayLine, ...] = (
    # Horizontal
    PayLine(0, "top_row", ((0, 0), (1, 0), (2, 0))),
    PayLine(1, "middle_row", ((0, 1), (1, 1), (2, 1))),
    PayLine(2, "bottom_row", ((0, 2), (1, 2), (2, 2))),
    # Diagonal
    PayLine(3, "diagonal_down", ((0, 0), (1, 1), (2, 2))),
    PayLine(4, "diagonal_up", ((2, 0), (1, 1), (0, 2))),
    # Vertical
    PayLine(5, "left_column", ((0, 0), (0, 1), (0, 2))),
    PayLine(6, "middle_column", ((1, 0), (1, 1), (1, 2))),
    PayLine(7, "right_column", ((2, 0), (2, 1), (2, 2))),
)

ALL_LINES: List[int] = [line.index for line in PAYLINES]

# Line presets offered to players
LINE_SELECTIONS = [
    {"label": "1 Line", "lines": [1], "description": "Play just the middle row"},
    {"label": "3 Lines", "lines": [0, 1, 2], "description": "Play all horizontal lines"},
    {"label": "5 Lines", "lines": [0, 1, 2, 3, 4], "description": "Play rows and diagonals"},
    {"label": "8 Lines", "lines": ALL_LINES, "description": "Play all possible lines"},
]

# One-click bet presets; the bonus multiplier scales the spin's winnings
BET_MODES = [
    {"name": "Safe Bet", "bet_per_line": 1, "lines": [1], "bonus_multiplier": 1.0},
    {"name": "Standard Bet", "bet_per_line": 5, "lines": [0, 1, 2], "bonus_multiplier": 1.0},
    {"name": "Risky Bet", "bet_per_line": 10, "lines": [0, 1, 2, 3, 4], "bonus_multiplier": 1.0},
    {"name": "Max Risk", "bet_per_line": 20, "lines": ALL_LINES, "bonus_multiplier": 1.2},
]
