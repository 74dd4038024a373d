"""RTP simulation request DTO"""
from dataclasses import dataclass, field
from typing import List, Optional

MAX_SIMULATION_SPINS = 1_000_000


@dataclass
class SimulationRequest:
    """Request DTO for an RTP simulation"""

    spins: int = 100_000
    bet_per_line: float = 1
    active_lines: List[int] = field(default_factory=lambda: [1])
    seed: Optional[int] = 42

    @classmethod
    def from_snake_case(cls, data: dict) -> 'SimulationRequest':
        """Create from snake_case dictionary (REST API)"""
        return cls(
            spins=int(data.get('spins', 100_000)),
            bet_per_line=data.get('bet_per_line', 1),
            active_lines=list(data.get('active_lines', [1])),
            seed=data.get('seed', 42)
        )
