from .rabbitmq_message_publisher import RabbitMQMessagePublisher

__all__ = ['RabbitMQMessagePublisher']
