"""
Kafka Topic Initializer

Creates the fan-out topic at service startup with confluent-kafka's
AdminClient so the first publish does not hit UNKNOWN_TOPIC_OR_PART.
"""

from confluent_kafka import KafkaException
from confluent_kafka.admin import AdminClient, NewTopic

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.message_queue.kafka_constant_builder import KafkaTopicBuilder


TOPIC_ALREADY_EXISTS = 36


class KafkaTopicInitializer:
    def __init__(
        self,
        *,
        bootstrap_servers: str | None = None,
        total_partitions: int | None = None,
        replication_factor: int | None = None,
    ) -> None:
        self.bootstrap_servers = bootstrap_servers or settings.KAFKA_BOOTSTRAP_SERVERS
        self.total_partitions = total_partitions or settings.KAFKA_TOTAL_PARTITIONS
        self.replication_factor = replication_factor or settings.KAFKA_REPLICATION_FACTOR
        self.admin_client = AdminClient({'bootstrap.servers': self.bootstrap_servers})

    def ensure_topics_exist(self) -> bool:
        """Blocking; run it in a worker thread from async code."""
        try:
            required_topics = KafkaTopicBuilder.get_all_topics()
            existing_topics = set(self.admin_client.list_topics(timeout=10).topics.keys())
            topics_to_create = [topic for topic in required_topics if topic not in existing_topics]

            if not topics_to_create:
                Logger.base.info(f'✅ [TOPIC-INIT] All {len(required_topics)} topics exist')
                return True

            new_topics = [
                NewTopic(
                    topic=topic,
                    num_partitions=self.total_partitions,
                    replication_factor=self.replication_factor,
                    config={
                        'cleanup.policy': 'delete',
                        'retention.ms': '604800000',  # 7 days
                    },
                )
                for topic in topics_to_create
            ]

            futures = self.admin_client.create_topics(new_topics, request_timeout=30)

            success_count = 0
            for topic, future in futures.items():
                try:
                    future.result()
                    Logger.base.info(f'✅ [TOPIC-INIT] Created topic: {topic}')
                    success_count += 1
                except KafkaException as e:
                    # Another instance may have created it concurrently
                    if e.args[0].code() == TOPIC_ALREADY_EXISTS:
                        success_count += 1
                    else:
                        Logger.base.error(f'❌ [TOPIC-INIT] Failed to create {topic}: {e}')

            return success_count == len(topics_to_create)

        except KafkaException as e:
            Logger.base.error(f'❌ [TOPIC-INIT] Failed to ensure topics exist: {e}')
            return False
