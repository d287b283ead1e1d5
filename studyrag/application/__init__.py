"""
Application layer: services coordinating core logic and persistence.
"""
