from .spin_use_case import SpinUseCase
from .simulate_rtp_use_case import SimulateRtpUseCase

__all__ = [
    'SpinUseCase',
    'SimulateRtpUseCase'
]
