"""Observability utilities for resource duplication.

This package provides:
- Prometheus counters for registrations and duplication outcomes
- Structured logging with contextual information
"""

from admin_duplicatable.observability.logging import (
    bound_duplication_context,
    configure_logging,
    get_logger,
)
from admin_duplicatable.observability.metrics import (
    record_duplication,
    record_registration,
)

__all__ = [
    "bound_duplication_context",
    "configure_logging",
    "get_logger",
    "record_duplication",
    "record_registration",
]
