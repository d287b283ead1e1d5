"""
Document ingestion Celery task.

Task: ingest_document(document_id, file_path)
Flow: extract -> chunk -> save -> READY | FAILED

Runs the same DocumentPipeline as in-process dispatch, with its own event
loop, engine and database sessions. Not retried: a run always ends in a
terminal status, and terminal documents never transition again.

Dependencies: studyrag.core.document_processing, studyrag.boundary.db, studyrag.workers
System role: Out-of-process document ingestion
"""

import asyncio
import logging
from functools import partial

from sqlalchemy.ext.asyncio import AsyncEngine

from studyrag.boundary.db.connection import create_worker_engine, get_async_session_factory
from studyrag.boundary.db.sql_document_store import sql_store_scope
from studyrag.core.document_processing import DocumentPipeline, PipelineResult
from studyrag.workers import celery_app

logger = logging.getLogger(__name__)


def build_pipeline(engine: AsyncEngine) -> DocumentPipeline:
    return DocumentPipeline(partial(sql_store_scope, get_async_session_factory(engine)))


async def _ingest(document_id: str, file_path: str) -> PipelineResult:
    # One engine per task loop; asyncpg connections cannot cross loops.
    engine = create_worker_engine()
    try:
        return await build_pipeline(engine).run(document_id, file_path)
    finally:
        await engine.dispose()


@celery_app.task(bind=True, name="studyrag.ingest_document")
def ingest_document(self, document_id: str, file_path: str) -> dict:
    """
    Ingest a document outside the API process.

    Args:
        document_id: Document UUID as string, already in PROCESSING
        file_path: Path to the raw document

    Returns:
        dict: PipelineResult with status, chunk count and timing
    """
    logger.info(
        f"{__name__}:ingest_document - Task received",
        extra={"document_id": document_id, "task_id": self.request.id},
    )
    result = asyncio.run(_ingest(document_id, file_path))
    return result.model_dump(mode="json")
