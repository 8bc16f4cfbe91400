"""
Common utilities shared across tools
"""

from .base_output_formatter import BaseOutputFormatter, OutputFormat, TableFormatter
from .logging_config import configure_logging, get_logger, get_logging_manager
from .telemetry import get_telemetry_manager, trace_operation

__all__ = [
    "configure_logging",
    "get_logger",
    "get_logging_manager",
    "get_telemetry_manager",
    "trace_operation",
    "BaseOutputFormatter",
    "OutputFormat",
    "TableFormatter",
]
