"""
Core domain logic: document processing, lexical scoring and retrieval.
"""
