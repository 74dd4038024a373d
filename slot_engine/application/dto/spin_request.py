"""Spin request DTO"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SpinRequest:
    """Request DTO for a spin.

    ``bet_mode`` names a preset from the game configuration; when set, the
    preset's bet and lines replace ``bet_per_line`` and ``active_lines``.
    """

    session_id: str
    bet_per_line: float
    active_lines: List[int] = field(default_factory=lambda: [1])
    bet_mode: Optional[str] = None

    @property
    def total_bet(self) -> float:
        return self.bet_per_line * len(self.active_lines)

    @classmethod
    def from_dict(cls, data: dict) -> 'SpinRequest':
        """Create from camelCase dictionary (browser client)"""
        return cls(
            session_id=data.get('sessionId', ''),
            bet_per_line=data.get('betPerLine', 0),
            active_lines=list(data.get('activeLines', [1])),
            bet_mode=data.get('betMode')
        )

    @classmethod
    def from_snake_case(cls, data: dict) -> 'SpinRequest':
        """Create from snake_case dictionary (REST API)"""
        return cls(
            session_id=data.get('session_id', ''),
            bet_per_line=data.get('bet_per_line', 0),
            active_lines=list(data.get('active_lines', [1])),
            bet_mode=data.get('bet_mode')
        )
