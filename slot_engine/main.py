"""
Slot Engine - HTTP entry point

Configured through environment variables:
- SLOT_ENGINE_CONFIG - JSON file with engine overrides
- MONGODB_URL - persist sessions and spin history in MongoDB
- USE_RABBITMQ=true - publish settled spins to RabbitMQ
- PORT (default 8082)
"""
import os
import logging

import sentry_sdk
from tornado import web, ioloop
from sentry_sdk.integrations.tornado import TornadoIntegration

from slot_engine import __version__
from slot_engine.config.container import Container
from slot_engine.presentation.http.handlers import (
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

logger = logging.getLogger(__name__)


def init_sentry():
    sentry_sdk.init(
        dsn=os.environ.get('SENTRY_DSN'),
        integrations=[TornadoIntegration()],
        traces_sample_rate=float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE', '1.0')),
        environment=os.environ.get('SENTRY_ENVIRONMENT', 'development'),
        profiles_sample_rate=float(os.environ.get('SENTRY_PROFILES_SAMPLE_RATE', '0')),
        debug=os.environ.get('SENTRY_DEBUG', 'false').lower() == 'true',
        release=f"slot-engine@{os.environ.get('APP_VERSION', __version__)}"
    )


def make_app(container: Container = None):
    """Create Tornado application"""
    container = container or Container.get_instance()
    spin_args = {"spin_use_case": container.get_spin_use_case()}

    routes = [
        (r"/health", HealthHandler),
        (r"/metrics", MetricsHandler),
        (r"/spin", SpinHandler, spin_args),
        (r"/paytable", PaytableHandler, spin_args),
        (r"/weights/([^/]+)", WeightsHandler, spin_args),
        (r"/session/([^/]+)", SessionHandler, spin_args),
        (r"/reset", ResetHandler, spin_args),
        (r"/intro/([^/]+)", IntroHandler, spin_args),
        (r"/sounds/([^/]+)", SoundCuesHandler, {"sound_cues": container.get_sound_cues()}),
        (r"/simulate", SimulateHandler, {"simulate_use_case": container.get_simulate_use_case()}),
    ]

    return web.Application(routes)


def main():
    logging.basicConfig(level=logging.INFO)
    init_sentry()

    app = make_app()
    port = int(os.environ.get('PORT', 8082))
    app.listen(port)
    logger.info(f"Slot Engine started on :{port}")

    ioloop.IOLoop.current().start()


if __name__ == "__main__":
    main()
