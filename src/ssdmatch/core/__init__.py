"""Core subpackage.

- config: INI-backed ConfigManager
- logging_setup: session-based logging configuration
- worker: bounded thread pool for chunked fan-out/fan-in
"""
