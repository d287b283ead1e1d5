"""
Application services.

Exports: DocumentService
"""

from studyrag.application.services.document_service import DocumentService, build_default_pipeline

__all__ = ["DocumentService", "build_default_pipeline"]
