"""
Configuration settings for document processing pipeline.

Provides environment-based configuration for chunking and retrieval.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=500,
        gt=0,
        description="Target chunk size in whitespace-delimited words",
    )
    chunk_overlap: int = Field(
        default=50,
        ge=0,
        description="Words shared between consecutive chunks",
    )

    # Retrieval settings
    retrieval_top_k: int = Field(
        default=3,
        gt=0,
        description="Number of chunks returned per query",
    )

    max_error_message_length: int = Field(
        default=2000,
        gt=0,
        description="Failed-status error messages are truncated to this length",
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "DocumentPipelineSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
