"""
ETL Framework Core Package

This package contains the core infrastructure for the snapshot ETL utilities,
providing shared configuration, logging, exceptions and the processor interface
implemented by each processing module.
"""

from .interfaces import ModuleProcessor, ProcessingResult, ModuleStatus

__version__ = "1.0.0"
__all__ = ['ModuleProcessor', 'ProcessingResult', 'ModuleStatus']
