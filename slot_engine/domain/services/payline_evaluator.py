"""Pay-line win evaluation"""
import logging
import math
from typing import List, Optional, Sequence, Tuple

from slot_engine.domain.entities.grid import Grid
from slot_engine.domain.entities.paylines import PAYLINES, PayLine
from slot_engine.domain.entities.symbol_catalog import SymbolCatalog
from slot_engine.domain.entities.symbols import Symbol
from slot_engine.domain.entities.win_result import LineWin, NearMiss, WinResult
from slot_engine.domain.exceptions import InvalidBetError, InvalidLineIndexError

logger = logging.getLogger(__name__)

MIN_WINNING_RUN = 3
NEAR_MISS_RUN = 2


def run_length(symbols: Sequence[Symbol]) -> int:
    """Length of the run of identical symbols starting at the first position"""
    if not symbols:
        return 0
    first = symbols[0]
    count = 1
    for symbol in symbols[1:]:
        if symbol != first:
            break
        count += 1
    return count


class PaylineEvaluator:
    """Scores a grid against the active pay-lines.

    Regular line wins pay ``multiplier * bet_per_line``. When more than one
    line wins the line total gets a flat bonus of ``1 + step * lines`` and is
    floored to whole credits. The jackpot bonus is added on top of the regular
    line winnings, and only when the bet per line equals the catalog's
    maximum credit multiplier. A bet-mode bonus multiplier then scales line
    and jackpot winnings, again floored. Near-miss consolation prizes come
    last and never count as wins.
    """

    def __init__(self, catalog: SymbolCatalog, paylines: Sequence[PayLine] = PAYLINES,
                 multi_line_bonus_step: float = 0.1):
        self.catalog = catalog
        self.paylines = tuple(paylines)
        self.multi_line_bonus_step = multi_line_bonus_step

    def validate(self, active_lines: Sequence[int], bet_per_line: float) -> None:
        if not active_lines:
            raise InvalidBetError("At least one pay-line must be active")
        seen = set()
        for index in active_lines:
            if isinstance(index, bool) or not isinstance(index, int) \
                    or not 0 <= index < len(self.paylines):
                raise InvalidLineIndexError(
                    f"Pay-line index {index!r} is outside 0..{len(self.paylines) - 1}",
                    {"line_index": index}
                )
            if index in seen:
                raise InvalidLineIndexError(
                    f"Pay-line {index} selected more than once",
                    {"line_index": index}
                )
            seen.add(index)
        if isinstance(bet_per_line, bool) or not isinstance(bet_per_line, (int, float)) \
                or not math.isfinite(bet_per_line) or bet_per_line <= 0:
            raise InvalidBetError(
                "Bet per line must be a positive number",
                {"bet_per_line": bet_per_line}
            )

    def evaluate(self, grid: Grid, active_lines: Sequence[int], bet_per_line: float,
                 bonus_multiplier: float = 1.0) -> WinResult:
        self.validate(active_lines, bet_per_line)

        line_wins: List[LineWin] = []
        near_misses: List[NearMiss] = []
        line_total = 0

        for index in active_lines:
            symbols = self.paylines[index].symbols_on(grid)
            run = run_length(symbols)
            config = self.catalog.config_for(symbols[0])

            if run >= MIN_WINNING_RUN:
                multiplier = config.multiplier.for_run(run)
                line_wins.append(LineWin(index, config.symbol, multiplier, run))
                line_total += multiplier * bet_per_line
            elif run == NEAR_MISS_RUN and config.consolation_prize > 0:
                near_misses.append(NearMiss(index, config.symbol, config.consolation_prize))

        winnings = line_total
        if len(line_wins) > 1:
            bonus = 1 + self.multi_line_bonus_step * len(line_wins)
            winnings = math.floor(line_total * bonus)

        jackpot, jackpot_symbol, jackpot_payout = self._jackpot(line_wins, active_lines, bet_per_line)
        winnings += jackpot_payout
        if bonus_multiplier != 1:
            winnings = math.floor(winnings * bonus_multiplier)

        consolation = sum(near_miss.consolation_prize for near_miss in near_misses)
        winnings += consolation

        if jackpot_payout:
            logger.info(f"Jackpot bonus {jackpot_payout} paid (full jackpot: {jackpot})")

        return WinResult(
            winnings=winnings,
            jackpot=jackpot,
            symbol=jackpot_symbol,
            lines=line_wins,
            near_misses=near_misses,
            jackpot_payout=jackpot_payout,
            consolation=consolation
        )

    def _jackpot(self, line_wins: List[LineWin], active_lines: Sequence[int],
                 bet_per_line: float) -> Tuple[bool, Optional[Symbol], float]:
        """Jackpot flag, symbol and bonus payout for the evaluated lines"""
        jackpot_symbol = self.catalog.jackpot_symbol
        if bet_per_line != self.catalog.max_credit_multiplier:
            return False, None, 0

        jackpot_lines = [win for win in line_wins if win.symbol == jackpot_symbol]
        if not jackpot_lines:
            return False, None, 0

        config = self.catalog.config_for(jackpot_symbol)
        payout = len(jackpot_lines) * config.jackpot_multiplier * bet_per_line
        every_line_hit = (
            len(line_wins) == len(active_lines)
            and all(win.symbol == jackpot_symbol for win in line_wins)
        )
        return every_line_hit, jackpot_symbol, payout
