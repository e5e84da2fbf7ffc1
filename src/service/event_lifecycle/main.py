"""
Event Lifecycle Service - Main Application
Handles event submission, status transitions and the publish fan-out.

Run:
    uvicorn src.service.event_lifecycle.main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager
import os

import anyio.to_thread
from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup as cleanup_container, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.message_queue.event_publisher import close_producer
from src.platform.message_queue.kafka_topic_initializer import KafkaTopicInitializer
from src.platform.observability.tracing import TracingConfig
from src.platform.state.kvrocks_client import kvrocks_client


SERVICE_NAME = 'event-lifecycle-service'


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Event Lifecycle] Starting up...')

    tracing = TracingConfig(service_name=SERVICE_NAME)
    tracing.setup()
    tracing.instrument_redis()
    Logger.base.info('📊 [Event Lifecycle] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Event Lifecycle] Dependency injection wired')

    # Initialize Kvrocks connection pool (fail-fast)
    await kvrocks_client.initialize()

    # Topic creation is best-effort: publishes still surface their own errors
    if os.getenv('ENABLE_KAFKA', 'true').lower() in ('true', '1'):
        topic_initializer = KafkaTopicInitializer()
        if not await anyio.to_thread.run_sync(topic_initializer.ensure_topics_exist):
            Logger.base.warning('⚠️  [Event Lifecycle] Fan-out topic not confirmed at startup')
    else:
        Logger.base.info('⏭️  [Event Lifecycle] Kafka disabled (ENABLE_KAFKA=false)')

    Logger.base.info('✅ [Event Lifecycle] Startup complete')

    yield

    Logger.base.info('🛑 [Event Lifecycle] Shutting down...')

    await close_producer()
    await kvrocks_client.disconnect()
    tracing.shutdown()
    container.unwire()
    cleanup_container()

    Logger.base.info('👋 [Event Lifecycle] Shutdown complete')


app = create_app(lifespan=lifespan, service_name=SERVICE_NAME)
