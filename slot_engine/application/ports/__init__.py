from .session_repository_port import SessionRepositoryPort
from .spin_history_port import SpinHistoryPort
from .message_publisher_port import MessagePublisherPort
from .audio_port import AudioPort
from .session_store_port import SessionStorePort

__all__ = [
    'SessionRepositoryPort',
    'SpinHistoryPort',
    'MessagePublisherPort',
    'AudioPort',
    'SessionStorePort'
]
