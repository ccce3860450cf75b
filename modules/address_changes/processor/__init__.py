"""Address Change Processing

Pipeline orchestration, progress reporting and the ModuleProcessor
implementation for the address change ETL.
"""

from .address_change_pipeline import AddressChangePipeline, PipelineRunResult
from .address_change_processor import AddressChangeProcessor
from .progress_reporter import LoggingProgressReporter, RecordingProgressReporter

__all__ = [
    'AddressChangePipeline', 'PipelineRunResult', 'AddressChangeProcessor',
    'LoggingProgressReporter', 'RecordingProgressReporter'
]
