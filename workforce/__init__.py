"""Workforce package for hotel capacity planning and labour compliance.

Modules:
- config: load and validate planning configuration (YAML or JSON)
- errors: configuration and validation error types
- logging_config: package logger setup
- domain: SQLAlchemy models, repositories and value types
- services: capacity, leave ledger, annual planning and alerts
- engine: schedule generator, schedule editor and recomputation pipeline
- io: CSV import/export
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "errors",
    "logging_config",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
