import os
import unittest
from unittest.mock import patch

from slot_engine.config.container import Container
from slot_engine.infrastructure.persistence.in_memory_session_repository import InMemorySessionRepository
from slot_engine.infrastructure.persistence.mongo_session_repository import MongoSessionRepository


class TestContainer(unittest.TestCase):

    def setUp(self):
        Container.reset_instance()

    def tearDown(self):
        Container.reset_instance()

    @patch.dict(os.environ, {}, clear=True)
    def test_in_memory_wiring_by_default(self):
        container = Container.get_instance()
        self.assertIs(container, Container.get_instance())
        self.assertIsInstance(container.session_repository, InMemorySessionRepository)
        self.assertIsNone(container.spin_history)
        self.assertIsNone(container.message_publisher)
        self.assertIs(container.get_spin_use_case().audio, container.get_sound_cues())

    @patch('slot_engine.config.container.RabbitMQMessagePublisher')
    @patch('slot_engine.config.container.MongoClient')
    def test_mongo_and_rabbitmq_wiring(self, mock_client, mock_publisher):
        environ = {'MONGODB_URL': 'mongodb://mongo:27017', 'USE_RABBITMQ': 'true'}
        with patch.dict(os.environ, environ, clear=True):
            container = Container.get_instance()
        mock_client.assert_called_once_with('mongodb://mongo:27017')
        self.assertIsInstance(container.session_repository, MongoSessionRepository)
        self.assertIsNotNone(container.spin_history)
        self.assertIs(container.message_publisher, mock_publisher.return_value)


if __name__ == '__main__':
    unittest.main()
