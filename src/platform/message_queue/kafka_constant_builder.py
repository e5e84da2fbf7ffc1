class ServiceNames:
    """Service name constants"""

    EVENT_LIFECYCLE_SERVICE = 'event-lifecycle-service'  # Status transitions + fan-out
    NOTIFICATION_SERVICE = 'notification-service'  # Push/email to organizer followers


class KafkaTopicBuilder:
    """
    Kafka Topic Naming Unified Builder

    Format: {action}______{from_service}___to___{to_service}
    """

    @staticmethod
    def event_published() -> str:
        """Fan-out of newly published events to downstream subscribers.

        Consumers must be idempotent: delivery is at-least-once and the
        publish step may be re-driven for the same event.
        """
        return f'event-published______{ServiceNames.EVENT_LIFECYCLE_SERVICE}___to___{ServiceNames.NOTIFICATION_SERVICE}'

    @staticmethod
    def get_all_topics() -> list[str]:
        return [KafkaTopicBuilder.event_published()]
