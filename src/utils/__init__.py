"""
Utility modules for the snapshot ETL framework.

This module provides logging setup and the performance-logging decorator used
by the processing modules and their command-line entry points.
"""

from .logging_setup import setup_logging, get_logger, log_performance

__all__ = ["setup_logging", "get_logger", "log_performance"]
