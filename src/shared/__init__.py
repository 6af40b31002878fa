"""Shared utilities and helpers."""
from shared.diagnostics import (
    log_comprehensive_diagnostics,
    log_memory_usage,
)
from shared.progress import ConsoleProgress

__all__ = [
    'ConsoleProgress',
    'log_comprehensive_diagnostics',
    'log_memory_usage',
]
