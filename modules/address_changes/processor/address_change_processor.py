"""AddressChangeProcessor Implementation

Framework-facing wrapper around AddressChangePipeline. Implements the
ModuleProcessor interface so the module is configured, run and reported on the
same way as every other processing module.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import ValidationError

from src.config.config_loader import ConfigLoader
from src.exceptions import ETLBaseException, ETLConfigurationError
from src.interfaces.module_processor import ModuleProcessor, ProcessingResult, ModuleStatus
from ..models import AddressChangesSettings, ProgressCallback
from .address_change_pipeline import AddressChangePipeline, PipelineRunResult
from .progress_reporter import LoggingProgressReporter

logger = logging.getLogger(__name__)


class AddressChangeProcessor(ModuleProcessor):
    """Address change ETL implementing the ModuleProcessor interface.
    
    With an ``effective_date`` the processor compares that date against the
    previous calendar day; without one it walks every address snapshot found
    in the input directory.
    
    Args:
        config_loader: Framework configuration loader
        environment: Environment name used to read configuration
        effective_date: Date to process, or None for range mode
        overrides: Setting values that win over configuration (CLI flags)
        progress: Stage event callback, defaults to logging each event
        settings: Ready-made settings; when given, configuration is not read
    """

    MODULE_NAME = "address_changes"

    def __init__(self, config_loader: Optional[ConfigLoader], environment: str = "development",
                 effective_date: Optional[date] = None,
                 overrides: Optional[Dict[str, Any]] = None,
                 progress: Optional[ProgressCallback] = None,
                 settings: Optional[AddressChangesSettings] = None):
        self.config_loader = config_loader
        self.environment = environment
        self.effective_date = effective_date
        self._overrides = overrides or {}
        self.progress = progress if progress is not None else LoggingProgressReporter(logger)
        self._settings: Optional[AddressChangesSettings] = settings
        self._configuration_valid: Optional[bool] = None
        self._last_run: Optional[datetime] = None
        self._last_error: Optional[str] = None
        self.last_result: Optional[PipelineRunResult] = None
        
        logger.info(f"AddressChangeProcessor initialized (environment={environment}, "
                    f"mode={'single_date' if effective_date else 'range'})")
    
    @property
    def settings(self) -> AddressChangesSettings:
        """Module settings, loaded on first access.
        
        Raises:
            ETLConfigurationError: Configuration is missing or invalid
        """
        if self._settings is None:
            if self.config_loader is None:
                raise ETLConfigurationError("No settings or configuration loader provided")
            try:
                self._settings = AddressChangesSettings.from_config(
                    self.config_loader, self.environment, **self._overrides
                )
            except ValidationError as e:
                raise ETLConfigurationError(
                    f"Invalid address_changes settings: {e.error_count()} error(s): {e}",
                    {"environment": self.environment}
                ) from e
        return self._settings
    
    def validate_configuration(self) -> bool:
        """Check that settings load and that the input and output directories exist.
        
        Returns:
            bool: True if the module can run, False otherwise
        """
        if self._configuration_valid is not None:
            return self._configuration_valid
        
        try:
            settings = self.settings
        except ETLBaseException as e:
            logger.error(f"Configuration validation failed: {e}")
            self._last_error = str(e)
            self._configuration_valid = False
            return False
        
        for label, directory in (("Input", settings.input_dir), ("Output", settings.output_dir)):
            if not directory.is_dir():
                logger.error(f"{label} directory does not exist: {directory}")
                self._last_error = f"{label} directory does not exist: {directory}"
                self._configuration_valid = False
                return False
        
        self._configuration_valid = True
        logger.info("Configuration validation passed")
        return True
    
    def process(self, dry_run: bool = False) -> ProcessingResult:
        """Run the address change pipeline.
        
        Any error stops the run at the failing date; it is reported in the
        result rather than raised.
        
        Args:
            dry_run: Detect changes without writing change logs
            
        Returns:
            ProcessingResult with total changes as ``records_processed`` and the
            per-date summaries under ``metadata['summaries']``
        """
        start_time = datetime.now()
        mode = "single_date" if self.effective_date else "range"
        logger.info(f"Starting address change processing (mode={mode}, dry_run={dry_run})")
        
        if not self.validate_configuration():
            return ProcessingResult(
                success=False,
                records_processed=0,
                errors=[self._last_error or "Configuration validation failed"],
                metadata={"dry_run": dry_run, "mode": mode},
                execution_time=0.0
            )
        
        pipeline = AddressChangePipeline(self.settings, progress=self.progress, dry_run=dry_run)
        
        try:
            if self.effective_date is not None:
                result = pipeline.run_for_date(self.effective_date)
            else:
                result = pipeline.run_range()
        except ETLBaseException as e:
            execution_time = (datetime.now() - start_time).total_seconds()
            logger.error(f"Address change processing failed after {execution_time:.3f}s: {e}")
            self._last_error = str(e)
            return ProcessingResult(
                success=False,
                records_processed=0,
                errors=[str(e)],
                metadata={
                    "dry_run": dry_run,
                    "mode": mode,
                    "error_type": type(e).__name__,
                    "error_context": {k: str(v) for k, v in e.context.items()},
                },
                execution_time=execution_time
            )
        
        self.last_result = result
        self._last_run = datetime.now()
        self._last_error = None
        
        for summary in result.summaries:
            logger.info(summary.get_change_summary())
        logger.info(f"Address change processing complete: {len(result.summaries)} date(s), "
                    f"{result.total_changes} change(s) in {result.elapsed_seconds:.1f}s")
        
        return ProcessingResult(
            success=True,
            records_processed=result.total_changes,
            errors=[],
            metadata={
                "dry_run": dry_run,
                "mode": result.mode,
                "baseline_date": result.baseline_date.isoformat() if result.baseline_date else None,
                "customer_snapshot_loads": [d.isoformat() for d in result.customer_snapshot_loads],
                "summaries": [summary.model_dump(mode="json") for summary in result.summaries],
            },
            execution_time=(datetime.now() - start_time).total_seconds()
        )
    
    def get_status(self) -> ModuleStatus:
        """Report configuration validity and the outcome of the last run."""
        is_configured = self.validate_configuration()
        
        if not is_configured or self._last_error:
            status = "error"
        else:
            status = "ready"
        
        return ModuleStatus(
            module_name=self.MODULE_NAME,
            is_configured=is_configured,
            last_run=self._last_run,
            status=status,
            health_check=is_configured and self._last_error is None
        )
