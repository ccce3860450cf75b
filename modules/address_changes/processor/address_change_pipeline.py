"""Address Change Pipeline

Sequences resolution, loading, detection and writing.

Single-date mode::

    resolve files -> load previous + current -> resolve customers -> detect -> write

Range mode::

    discover dates -> require >= 2 -> load baseline
        -> for each later date: load current -> resolve customers -> detect -> write
           -> current becomes previous

In range mode the current table is handed over as the next previous table
without re-reading it, and the customer index is reloaded only when the
resolved customer snapshot date changes. Any error aborts the whole run; dates
already written stay written, later dates are not attempted.
"""

import time
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from ..change_detection import ChangeSummary, ChangeType, count_by_type, detect_changes
from ..date_resolution import (
    discover_snapshot_dates,
    previous_day,
    require_minimum_dates,
    resolve_as_of_date,
    resolve_comparison_files,
    snapshot_path,
)
from ..models import AddressChangesSettings, AddressTable, CustomerNameIndex, ProgressCallback, emit
from ..snapshot_io import load_address_snapshot, load_customer_snapshot, write_change_log


class PipelineRunResult(BaseModel):
    """Summary of a pipeline run across one or more effective dates."""
    
    mode: str = Field(..., description="'single_date' or 'range'")
    baseline_date: Optional[date] = Field(None, description="First address snapshot, range mode only")
    summaries: List[ChangeSummary] = Field(default_factory=list)
    customer_snapshot_loads: List[date] = Field(
        default_factory=list, description="Customer snapshot dates loaded, in load order"
    )
    elapsed_seconds: float = Field(0.0, ge=0.0)
    dry_run: bool = False
    
    @property
    def total_changes(self) -> int:
        return sum(summary.total_changes for summary in self.summaries)


class AddressChangePipeline:
    """Orchestrates one address change run.
    
    Args:
        settings: Directories, file prefixes and buffer sizes
        progress: Optional callback receiving a StageEvent per completed stage
        dry_run: Detect changes but do not write change logs
    """
    
    def __init__(self, settings: AddressChangesSettings,
                 progress: Optional[ProgressCallback] = None, dry_run: bool = False):
        self.settings = settings
        self.progress = progress
        self.dry_run = dry_run
        self._customer_dates: Optional[List[date]] = None
        self._customer_date: Optional[date] = None
        self._customer_index: Optional[CustomerNameIndex] = None
        self._customer_loads: List[date] = []
    
    def run_for_date(self, effective_date: date) -> PipelineRunResult:
        """Compare ``effective_date`` against the previous calendar day.
        
        Both address files are checked before either is loaded.
        
        Raises:
            ResolutionError: A required address or customer snapshot is missing
            SchemaError, RowError, SnapshotIOError: An input file is invalid
            ReferentialError: A changed address has an orphan customer_id
            OutputWriteError: The change log could not be written
        """
        start = time.perf_counter()
        previous_path, current_path = resolve_comparison_files(
            self.settings.input_dir, self.settings.address_prefix, effective_date,
            self.settings.file_extension
        )
        emit(self.progress, "resolve", 2, time.perf_counter() - start,
             snapshot_date=effective_date, detail="previous and current address files present")
        
        previous = self._load_addresses(previous_path, previous_day(effective_date))
        current = self._load_addresses(current_path, effective_date)
        summary = self._process_date(effective_date, previous_day(effective_date), previous, current)
        
        return PipelineRunResult(
            mode="single_date",
            summaries=[summary],
            customer_snapshot_loads=list(self._customer_loads),
            elapsed_seconds=time.perf_counter() - start,
            dry_run=self.dry_run,
        )
    
    def run_range(self) -> PipelineRunResult:
        """Process every discovered address date after the first, in order.
        
        The earliest snapshot is the baseline and produces no output.
        
        Raises:
            ResolutionError: Fewer than two address snapshots, or no customer
                snapshot for a processing date
            plus any error listed for run_for_date
        """
        start = time.perf_counter()
        settings = self.settings
        
        address_dates = discover_snapshot_dates(
            settings.input_dir, settings.address_prefix, settings.file_extension
        )
        self._customer_dates = discover_snapshot_dates(
            settings.input_dir, settings.customer_prefix, settings.file_extension
        )
        emit(self.progress, "discover", len(address_dates), time.perf_counter() - start,
             path=str(settings.input_dir),
             detail=f"{len(self._customer_dates)} customer snapshot(s)")
        
        require_minimum_dates(address_dates, settings.address_prefix)
        
        baseline_date = address_dates[0]
        previous = self._load_addresses(self._address_path(baseline_date), baseline_date)
        previous_date = baseline_date
        summaries: List[ChangeSummary] = []
        
        for current_date in address_dates[1:]:
            current = self._load_addresses(self._address_path(current_date), current_date)
            summaries.append(self._process_date(current_date, previous_date, previous, current))
            # Rebind rather than copy; the old previous table is released here
            previous, previous_date = current, current_date
        
        return PipelineRunResult(
            mode="range",
            baseline_date=baseline_date,
            summaries=summaries,
            customer_snapshot_loads=list(self._customer_loads),
            elapsed_seconds=time.perf_counter() - start,
            dry_run=self.dry_run,
        )
    
    def output_path(self, effective_date: date) -> Path:
        return snapshot_path(self.settings.output_dir, self.settings.output_prefix,
                             effective_date, self.settings.file_extension)
    
    def _process_date(self, effective_date: date, previous_date: date,
                      previous: AddressTable, current: AddressTable) -> ChangeSummary:
        customer_date = self._resolve_customers(effective_date)
        changes = detect_changes(previous, current, self._customer_index, self._progress_for(effective_date))
        
        output_path = None
        if not self.dry_run:
            output_path = self.output_path(effective_date)
            write_change_log(output_path, changes, self._progress_for(effective_date))
        
        counts = count_by_type(changes)
        return ChangeSummary(
            effective_date=effective_date,
            previous_date=previous_date,
            customer_snapshot_date=customer_date,
            previous_records=len(previous),
            current_records=len(current),
            new_records=counts[ChangeType.NEW],
            updated_records=counts[ChangeType.UPDATED],
            deleted_records=counts[ChangeType.DELETED],
            output_path=str(output_path) if output_path is not None else None,
        )
    
    def _resolve_customers(self, effective_date: date) -> date:
        """Resolve and, if the date changed, load the customer snapshot."""
        if self._customer_dates is None:
            self._customer_dates = discover_snapshot_dates(
                self.settings.input_dir, self.settings.customer_prefix,
                self.settings.file_extension
            )
        
        customer_date = resolve_as_of_date(self._customer_dates, effective_date)
        if customer_date != self._customer_date or self._customer_index is None:
            path = snapshot_path(self.settings.input_dir, self.settings.customer_prefix,
                                 customer_date, self.settings.file_extension)
            self._customer_index = load_customer_snapshot(
                path, self._progress_for(effective_date), self.settings.read_buffer_size
            )
            self._customer_date = customer_date
            self._customer_loads.append(customer_date)
        else:
            emit(self.progress, "reuse_customers", len(self._customer_index), 0.0,
                 snapshot_date=effective_date, path=self._customer_index.source)
        return customer_date
    
    def _load_addresses(self, path: Path, snapshot_date: date) -> AddressTable:
        return load_address_snapshot(path, self._progress_for(snapshot_date),
                                     self.settings.read_buffer_size)
    
    def _address_path(self, snapshot_date: date) -> Path:
        return snapshot_path(self.settings.input_dir, self.settings.address_prefix,
                             snapshot_date, self.settings.file_extension)
    
    def _progress_for(self, effective_date: date) -> Optional[ProgressCallback]:
        """Wrap the progress callback so events carry the processing date."""
        if self.progress is None:
            return None
        progress = self.progress
        
        def tagged(event):
            if event.snapshot_date is None:
                event = event.model_copy(update={"snapshot_date": effective_date})
            progress(event)
        
        return tagged
