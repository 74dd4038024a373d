"""Dependency Injection Container"""
import os
import logging
from pymongo import MongoClient

from slot_engine.config.settings import EngineConfig, load_config
from slot_engine.infrastructure.audio.sound_cue_recorder import SoundCueRecorder
from slot_engine.infrastructure.persistence.in_memory_session_repository import InMemorySessionRepository
from slot_engine.infrastructure.persistence.in_memory_session_store import InMemorySessionStore
from slot_engine.infrastructure.persistence.mongo_session_repository import MongoSessionRepository
from slot_engine.infrastructure.persistence.mongo_spin_history import MongoSpinHistory
from slot_engine.infrastructure.messaging.rabbitmq_message_publisher import RabbitMQMessagePublisher
from slot_engine.application.use_cases.spin_use_case import SpinUseCase
from slot_engine.application.use_cases.simulate_rtp_use_case import SimulateRtpUseCase

logger = logging.getLogger(__name__)


class Container:
    """Simple DI Container for the slot engine"""

    _instance = None

    def __new__(cls, config: EngineConfig = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize(config)
        return cls._instance

    def _initialize(self, config: EngineConfig = None):
        """Initialize all dependencies"""
        self.config = config or load_config()

        # Sessions live in memory unless MongoDB is configured
        mongo_url = os.environ.get('MONGODB_URL')
        if mongo_url:
            self.mongo_client = MongoClient(mongo_url)
            self.db = self.mongo_client[os.environ.get('MONGODB_DATABASE', 'slot_engine')]
            self.session_repository = MongoSessionRepository(self.db)
            self.spin_history = MongoSpinHistory(self.db)
            logger.info("Using MongoDB session storage and spin history")
        else:
            self.mongo_client = None
            self.db = None
            self.session_repository = InMemorySessionRepository()
            self.spin_history = None
            logger.info("Using in-memory session storage")

        use_rabbitmq = os.environ.get('USE_RABBITMQ', 'false').lower() == 'true'
        self.message_publisher = RabbitMQMessagePublisher() if use_rabbitmq else None

        self.sound_cues = SoundCueRecorder()
        self.session_store = InMemorySessionStore()

        # Use cases
        self.spin_use_case = SpinUseCase(
            config=self.config,
            session_repository=self.session_repository,
            spin_history=self.spin_history,
            message_publisher=self.message_publisher,
            audio=self.sound_cues,
            session_store=self.session_store
        )
        self.simulate_use_case = SimulateRtpUseCase(self.config)

    @classmethod
    def get_instance(cls) -> 'Container':
        """Get singleton instance"""
        return cls()

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next call rebuilds from the environment"""
        cls._instance = None

    def get_spin_use_case(self) -> SpinUseCase:
        return self.spin_use_case

    def get_simulate_use_case(self) -> SimulateRtpUseCase:
        return self.simulate_use_case

    def get_sound_cues(self) -> SoundCueRecorder:
        return self.sound_cues
