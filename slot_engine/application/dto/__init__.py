from .spin_request import SpinRequest
from .spin_response import SpinResponse
from .simulation_request import SimulationRequest
from .simulation_result import SimulationResult

__all__ = [
    'SpinRequest',
    'SpinResponse',
    'SimulationRequest',
    'SimulationResult'
]
