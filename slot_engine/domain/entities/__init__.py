from .symbols import Symbol, Multiplier, SymbolConfig
from .symbol_catalog import SymbolCatalog, default_catalog
from .grid import Grid
from .paylines import PayLine, PAYLINES
from .win_result import LineWin, NearMiss, WinResult
from .game_state import GameState, VolatilityLevel
from .game_session import GameSession
from .spin_record import SpinRecord

__all__ = [
    'Symbol',
    'Multiplier',
    'SymbolConfig',
    'SymbolCatalog',
    'default_catalog',
    'Grid',
    'PayLine',
    'PAYLINES',
    'LineWin',
    'NearMiss',
    'WinResult',
    'GameState',
    'VolatilityLevel',
    'GameSession',
    'SpinRecord'
]
