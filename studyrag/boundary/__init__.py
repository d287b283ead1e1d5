"""
Boundary layer.

External system adapters: relational persistence for documents and chunks.
"""
