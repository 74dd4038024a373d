"""Weighted symbol draws and grid generation"""
import logging
import math
import random
from typing import List, Mapping, Optional, Tuple

from slot_engine.domain.entities.grid import GRID_COLUMNS, GRID_ROWS, Grid
from slot_engine.domain.entities.symbol_catalog import SymbolCatalog
from slot_engine.domain.entities.symbols import Symbol
from slot_engine.domain.exceptions import ConfigurationError, UnknownSymbolError

logger = logging.getLogger(__name__)


class OutcomeGenerator:
    """Draws symbols from a weight mapping.

    Symbols are walked in the catalog's declared order, never in the order of
    the mapping passed in, so a seeded ``random.Random`` reproduces the same
    grid for the same weights.
    """

    def __init__(self, catalog: SymbolCatalog, rng: Optional[random.Random] = None,
                 columns: int = GRID_COLUMNS, rows: int = GRID_ROWS):
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.columns = columns
        self.rows = rows

    def draw(self, weights: Mapping[Symbol, float]) -> Symbol:
        """Draw one symbol proportionally to ``weights``"""
        for symbol in weights:
            if symbol not in self.catalog:
                raise UnknownSymbolError(getattr(symbol, "name", symbol))

        order = self.catalog.symbols
        total = sum(weights.get(symbol, 0.0) for symbol in order)
        if not math.isfinite(total) or total <= 0:
            raise ConfigurationError(
                "Symbol weights must sum to a positive number",
                {"total_weight": total}
            )

        remainder = self.rng.random() * total
        for symbol in order:
            remainder -= weights.get(symbol, 0.0)
            if remainder <= 0:
                return symbol

        # Rounding left a sliver of the total unassigned
        return self.catalog.fallback_symbol

    def generate_grid(self, weights: Mapping[Symbol, float], near_miss_chance: float = 0.0) -> Grid:
        """Fill the grid column by column, top row first"""
        grid, _ = self.generate_grid_with_near_misses(weights, near_miss_chance)
        return grid

    def generate_grid_with_near_misses(
        self,
        weights: Mapping[Symbol, float],
        near_miss_chance: float = 0.0
    ) -> Tuple[Grid, List[int]]:
        """Generate a grid and report which columns were forced into a near miss"""
        columns = []
        near_miss_columns = []
        for index in range(self.columns):
            if near_miss_chance > 0 and self.rng.random() < near_miss_chance:
                target = self.draw(weights)
                columns.append(self.generate_near_miss_column(target, weights))
                near_miss_columns.append(index)
            else:
                columns.append(tuple(self.draw(weights) for _ in range(self.rows)))

        if near_miss_columns:
            logger.debug(f"Near-miss columns: {near_miss_columns}")
        return Grid(columns), near_miss_columns

    def generate_near_miss_column(self, target: Symbol, weights: Mapping[Symbol, float]) -> Tuple[Symbol, ...]:
        """All positions show ``target`` except one, which is drawn normally"""
        column = [target] * self.rows
        miss_position = self.rng.randrange(self.rows)
        column[miss_position] = self.draw(weights)
        return tuple(column)
