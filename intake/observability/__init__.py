"""
Observability module for the intake engine.

Structured logging only: the engine is pure and synchronous, so its
step events are the whole story. See logging_config for the formats.
"""
