"""
Text extraction task.

PDFs are loaded with LangChain's PyPDFLoader; plain text and markdown files
are read directly.

Dependencies: langchain_community.document_loaders, pypdf
System role: First stage of document ingestion pipeline
"""

from pathlib import Path
from typing import Protocol

from langchain_community.document_loaders import PyPDFLoader

from studyrag.core.exceptions import ExtractionError

TEXT_SUFFIXES = frozenset({".txt", ".md"})


class TextExtractor(Protocol):
    """Anything that turns a file path into full document text."""

    def extract(self, file_path: str) -> str: ...


class ParsingTask:
    """Extract full text from PDF and plain-text documents."""

    def __init__(self, page_separator: str = "\n") -> None:
        """
        Initialize parsing task.

        Args:
            page_separator: String placed between consecutive PDF pages
        """
        self._page_separator = page_separator

    def extract(self, file_path: str) -> str:
        """
        Extract text from a document.

        Args:
            file_path: Path to the document

        Returns:
            str: Full document text

        Raises:
            ExtractionError: When the file is missing, unsupported, or unreadable
        """
        path = Path(file_path)
        if not path.exists():
            raise ExtractionError(f"File not found: {file_path}", file_path)

        suffix = path.suffix.lower()
        if suffix == ".pdf":
            return self._extract_pdf(path)
        if suffix in TEXT_SUFFIXES:
            return self._extract_text(path)

        raise ExtractionError(
            f"Unsupported file format: {path.suffix}. Supported: .pdf, .txt, .md",
            file_path,
        )

    def _extract_pdf(self, path: Path) -> str:
        try:
            pages = PyPDFLoader(str(path)).load()
        except Exception as e:
            raise ExtractionError(f"Failed to extract text from PDF: {e}", str(path)) from e

        text = self._page_separator.join(page.page_content for page in pages)
        if not text.strip():
            raise ExtractionError("PDF document contains no extractable text", str(path))
        return text

    def _extract_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionError(f"Failed to read text file: {e}", str(path)) from e
