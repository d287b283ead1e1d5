"""
Document pipeline orchestrator.

Drives one document from PROCESSING to READY (text extracted, chunks saved)
or FAILED. Failures are recorded on the document, never raised to the caller
that created it. Runs can be awaited directly or dispatched as independent
asyncio tasks.

Dependencies: All task modules, configs, database (storage seam)
System role: Ingestion state machine (coordinates only)
"""

import asyncio
import logging
import time

from studyrag.core.exceptions import ChunkingError
from studyrag.observability.log_utils import log_exception_with_context, log_with_context

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .database import DocumentStore, StoreScope
from .models import Chunk, DocumentStatus, PipelineResult
from .tasks import ChunkingTask, ParsingTask, TextExtractor

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: extract -> chunk -> save -> READY | FAILED."""

    def __init__(
        self,
        store_scope: StoreScope,
        extractor: TextExtractor | None = None,
        chunking_task: ChunkingTask | None = None,
        settings: DocumentPipelineSettings | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            store_scope: Callable returning an async context manager that yields
                a DocumentStore; each run enters its own scope
            extractor: Text extractor (ParsingTask if None)
            chunking_task: Chunker (built from settings if None)
            settings: Pipeline settings (uses defaults if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._store_scope = store_scope
        self._extractor = extractor or ParsingTask()
        self._chunking_task = chunking_task or ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
        )
        self._background_tasks: set[asyncio.Task] = set()

    async def run(self, document_id: str, file_path: str) -> PipelineResult:
        """
        Process one document through the full pipeline.

        Args:
            document_id: Identifier of a document in PROCESSING
            file_path: Path to the raw document

        Returns:
            PipelineResult: Terminal status, chunk count and timing

        Raises:
            Exception: Only when the store cannot record the terminal status
        """
        start_time = time.perf_counter()
        document_id = str(document_id)

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run - Processing document",
            document_id=document_id,
            file_path=file_path,
        )

        async with self._store_scope() as store:
            try:
                chunk_count = await self._ingest(store, document_id, file_path)
            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:run - Document processing failed",
                    e,
                    document_id=document_id,
                )
                limit = self._settings.max_error_message_length
                error_message = (str(e) or type(e).__name__)[:limit]
                await store.set_status(document_id, DocumentStatus.FAILED, error_message)
                return PipelineResult(
                    document_id=document_id,
                    status=DocumentStatus.FAILED,
                    processing_time_ms=self._elapsed_ms(start_time),
                    error_message=error_message,
                )

        elapsed_ms = self._elapsed_ms(start_time)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run - Document ready",
            document_id=document_id,
            chunk_count=chunk_count,
            elapsed_ms=round(elapsed_ms, 1),
        )
        return PipelineResult(
            document_id=document_id,
            status=DocumentStatus.READY,
            chunk_count=chunk_count,
            processing_time_ms=elapsed_ms,
        )

    async def _ingest(self, store: DocumentStore, document_id: str, file_path: str) -> int:
        text = await asyncio.to_thread(self._extractor.extract, file_path)
        chunks = self._chunk(text, document_id)
        await store.save_chunks(document_id, chunks, text)
        await store.set_status(document_id, DocumentStatus.READY)
        return len(chunks)

    def _chunk(self, text: str, document_id: str) -> list[Chunk]:
        try:
            return self._chunking_task.chunk(text)
        except Exception as e:
            raise ChunkingError(f"Failed to chunk document: {e}", document_id) from e

    def dispatch(self, document_id: str, file_path: str) -> asyncio.Task:
        """
        Start an ingestion run without waiting for it.

        Must be called from a running event loop. The pipeline keeps a
        reference to the task until it finishes.

        Args:
            document_id: Identifier of a document in PROCESSING
            file_path: Path to the raw document

        Returns:
            asyncio.Task: The running ingestion task
        """
        task = asyncio.create_task(
            self.run(document_id, file_path),
            name=f"ingest-{document_id}",
        )
        self._background_tasks.add(task)
        task.add_done_callback(self._on_run_done)
        return task

    def _on_run_done(self, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            logger.warning(f"{__name__}:dispatch - Ingestion task {task.get_name()} cancelled")
            return
        exc = task.exception()
        if exc is not None:
            log_exception_with_context(
                logger,
                f"{__name__}:dispatch - Ingestion task could not record its outcome",
                exc,
                task=task.get_name(),
            )

    @property
    def pending_runs(self) -> int:
        return len(self._background_tasks)

    async def drain(self) -> None:
        """Wait for all dispatched runs to finish."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000
