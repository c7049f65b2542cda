"""
Celery application configuration for QuaiDirect workers
"""
import structlog
from celery import Celery
from celery.signals import setup_logging

from ..config import settings, configure_logging

logger = structlog.get_logger(__name__)


@setup_logging.connect
def config_loggers(*args, **kwargs):
    """Configure structured logging for Celery"""
    configure_logging()


celery_app = Celery(
    "quaidirect_workers",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

celery_app.config_from_object(settings.celery_config)

# Auto-discover tasks
celery_app.autodiscover_tasks(["quaidirect_workers.tasks"])
