"""
studyrag: document ingestion and lexical retrieval for study material.
"""

__version__ = "0.1.0"
