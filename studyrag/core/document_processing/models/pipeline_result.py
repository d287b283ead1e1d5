"""
Pipeline result model for document processing.

Represents the outcome of one ingestion run.

Dependencies: pydantic
System role: Return type for DocumentPipeline.run()
"""

from pydantic import BaseModel, Field

from .document_status import DocumentStatus


class PipelineResult(BaseModel):
    """Result of document processing pipeline execution."""

    document_id: str = Field(description="Unique document identifier")
    status: DocumentStatus = Field(description="Terminal status reached by the run")
    chunk_count: int = Field(default=0, ge=0, description="Number of chunks generated")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
    error_message: str | None = Field(default=None, description="Failure reason, if any")
