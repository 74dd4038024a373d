from .handlers import (
    HealthHandler,
    MetricsHandler,
    SpinHandler,
    PaytableHandler,
    WeightsHandler,
    SessionHandler,
    ResetHandler,
    IntroHandler,
    SoundCuesHandler,
    SimulateHandler
)

__all__ = [
    'HealthHandler',
    'MetricsHandler',
    'SpinHandler',
    'PaytableHandler',
    'WeightsHandler',
    'SessionHandler',
    'ResetHandler',
    'IntroHandler',
    'SoundCuesHandler',
    'SimulateHandler'
]
