"""
Celery workers module.

Background task processing for document ingestion.

Dependencies: celery, studyrag.configs
System role: Background task processing
"""

from celery import Celery
from celery.signals import setup_logging

from studyrag.configs import get_settings
from studyrag.observability.logger import configure_logging

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    "studyrag",
    broker=celery_config.broker_url,
    backend=celery_config.result_backend_url,
    include=["studyrag.workers.tasks.document_ingestion"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    result_serializer=celery_config.result_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
)


@setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Replace Celery's logging setup with the application's."""
    configure_logging(settings.log_level)
