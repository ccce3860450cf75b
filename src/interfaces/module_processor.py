"""ETL Module Processor Interface

Contract between the framework and a processing module. A module is built from
a ConfigLoader, validates its own configuration, runs, and reports the outcome
as a ProcessingResult; its health is reported as a ModuleStatus. Command-line
entry points only depend on this interface.
"""

from abc import ABC, abstractmethod
from pydantic import BaseModel, Field
from typing import Optional, Dict, List, Any
from datetime import datetime


class ProcessingResult(BaseModel):
    """Outcome of one ``process`` call.

    A failed run is reported with ``success=False`` and the error messages in
    ``errors``; modules put run details (dates processed, per-date counts,
    error type) in ``metadata``.
    """

    success: bool = Field(..., description="Whether the run completed without error")
    records_processed: int = Field(ge=0, description="Records produced by the run")
    errors: List[str] = Field(default_factory=list, description="Error messages, empty on success")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Module-specific run details")
    execution_time: float = Field(ge=0.0, description="Wall-clock run time in seconds")


class ModuleStatus(BaseModel):
    """Health and configuration state of a module."""

    module_name: str = Field(..., description="Module identifier")
    is_configured: bool = Field(..., description="Whether configuration validated")
    last_run: Optional[datetime] = Field(None, description="Time of the last successful run")
    status: str = Field(..., description="'ready', 'running', 'error' or 'disabled'")
    health_check: bool = Field(..., description="True when configured and the last run did not fail")


class ModuleProcessor(ABC):
    """Base class for processing modules."""

    @abstractmethod
    def __init__(self, config_loader):
        """Build the module.

        Args:
            config_loader: ConfigLoader used to read the module's settings
        """

    @abstractmethod
    def validate_configuration(self) -> bool:
        """Return True when the module's settings load and its resources exist."""

    @abstractmethod
    def process(self, dry_run: bool = False) -> ProcessingResult:
        """Run the module.

        Args:
            dry_run: Do all processing but write no output

        Returns:
            ProcessingResult describing success or failure
        """

    @abstractmethod
    def get_status(self) -> ModuleStatus:
        """Report configuration validity and the outcome of the last run."""
