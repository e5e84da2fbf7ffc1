"""
Domain Event Publisher

Async event publishing with confluent-kafka's AIOProducer.
Payloads are JSON (orjson) so non-Python consumers can read them directly.

Features:
- Global async producer instance for connection reuse
- Idempotent producer with acks=all
- Awaits the delivery report: publish is at-least-once and a failure is
  visible to the caller
"""

from confluent_kafka.experimental.aio import AIOProducer
from opentelemetry import trace
import orjson

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.message_queue.mq_domain_event import MqDomainEvent
from src.platform.observability.tracing import inject_trace_context


_global_producer: AIOProducer | None = None


async def _get_global_producer() -> AIOProducer:
    """Get global async producer instance - avoid creating new producer on every publish"""
    global _global_producer
    if _global_producer is None:
        _global_producer = AIOProducer(settings.KAFKA_PRODUCER_CONFIG)
    return _global_producer


async def publish_domain_event(
    *,
    event: MqDomainEvent,
    topic: str,
    partition: int,
    key: str | None = None,
) -> None:
    """
    Publish domain event to Kafka topic and wait for the broker ack.

    Raises:
        KafkaException: delivery failed (callers classify it)
    """
    tracer = trace.get_tracer(__name__)

    with tracer.start_as_current_span(
        'kafka.publish',
        attributes={
            'messaging.system': 'kafka',
            'messaging.destination': topic,
            'messaging.destination_kind': 'topic',
            'messaging.kafka.partition': partition,
            'event.type': event.__class__.__name__,
        },
    ):
        trace_headers = inject_trace_context()
        headers = [('message_type', event.__class__.__name__)] + list(trace_headers.items())

        producer = await _get_global_producer()
        delivery = await producer.produce(
            topic=topic,
            value=orjson.dumps(event.to_message()),
            key=key,
            partition=partition,
            headers=headers,
        )
        await delivery

        Logger.base.info(f'Published {event.__class__.__name__} to {topic} (partition={partition})')


async def close_producer() -> None:
    global _global_producer
    if _global_producer is not None:
        await _global_producer.flush()
        await _global_producer.close()
        _global_producer = None
        Logger.base.info('Closed async producer')
