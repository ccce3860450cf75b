"""Change Log Writer

Writes ``address_changes_YYYYMMDD.csv``:

    change_type,address_id,...,end_date      <- header
    UPDATED,1,100,"Jane Doe","2 Main St",...  <- one line per change
                                              <- blank line
    Expected records: 1                       <- footer

Quoting is fixed per column, independent of the data. The file is written to
``<path>.tmp`` and renamed over ``<path>`` only once complete, so readers never
observe a partial change log.
"""

import os
import time
from pathlib import Path
from typing import Optional, Sequence, Union

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from ..change_detection.change_detection_models import AddressChange
from ..exceptions import OutputWriteError
from ..models import ProgressCallback, emit
from .csv_field_parser import quote_field

OUTPUT_COLUMNS = (
    "change_type", "address_id", "customer_id", "customer_name", "address_line1",
    "city", "state_province", "postal_code", "country", "start_date", "end_date",
)

HEADER = ",".join(OUTPUT_COLUMNS)

FOOTER_PREFIX = "Expected records: "

WRITE_BUFFER_SIZE = 65536


def format_change_row(change: AddressChange) -> str:
    """Render one change as a CSV line (without terminator)."""
    return ",".join((
        change.change_type.value,
        str(change.address_id),
        str(change.customer_id),
        quote_field(change.customer_name),
        quote_field(change.address_line1),
        quote_field(change.city),
        quote_field(change.state_province),
        quote_field(change.postal_code),
        change.country,
        change.start_date,
        change.end_date if change.end_date is not None else "",
    ))


@retry(
    stop=stop_after_attempt(3),
    wait=wait_fixed(0.2),
    retry=retry_if_exception_type(PermissionError),
    reraise=True
)
def _replace(source: str, target: str) -> None:
    # A reader briefly holding the target open can make the rename fail on
    # some platforms
    os.replace(source, target)


def write_change_log(path: Union[str, Path], changes: Sequence[AddressChange],
                     progress: Optional[ProgressCallback] = None) -> int:
    """Atomically write ``changes`` to ``path``.
    
    An empty sequence still produces a header, blank line and
    ``Expected records: 0`` footer.
    
    Args:
        path: Final output path
        changes: Changes in output order
        progress: Optional stage event callback
        
    Returns:
        Number of data rows written
        
    Raises:
        OutputWriteError: The temp file could not be written or renamed
    """
    final_path = str(path)
    temp_path = final_path + ".tmp"
    start = time.perf_counter()
    count = 0
    
    try:
        with open(temp_path, 'w', encoding='utf-8', newline='\n',
                  buffering=WRITE_BUFFER_SIZE) as handle:
            handle.write(HEADER)
            handle.write('\n')
            for change in changes:
                handle.write(format_change_row(change))
                handle.write('\n')
                count += 1
            handle.write('\n')
            handle.write(f"{FOOTER_PREFIX}{count}\n")
        
        _replace(temp_path, final_path)
    except BaseException as e:
        try:
            os.remove(temp_path)
        except OSError:
            pass  # best effort, the original error is what matters
        if isinstance(e, OSError):
            raise OutputWriteError(
                f"Failed to write change log {final_path}: {e.strerror or e}", final_path
            ) from e
        raise
    
    emit(progress, "write", count, time.perf_counter() - start, path=final_path)
    return count
