"""
Snapshot Date Resolution

Decides which files take part in a comparison:

- the previous address snapshot is always the calendar day before the
  effective date, and both files must exist before anything is loaded;
- the customer snapshot is the latest one dated on or before the processing
  date (an exact match is not required, customer rosters change less often
  than addresses);
- in range mode every ``<prefix>_YYYYMMDD<ext>`` file in a directory is
  discovered and processed in date order.
"""

import re
from bisect import bisect_right
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from ..exceptions import ResolutionError

DATE_FORMAT = "%Y%m%d"

_DATE_TEXT = re.compile(r'[0-9]{8}')


def parse_snapshot_date(text: str) -> date:
    """Parse a ``YYYYMMDD`` string.
    
    Raises:
        ValueError: Text is not eight digits forming a valid calendar date
    """
    if not _DATE_TEXT.fullmatch(text):
        raise ValueError(f"Invalid date '{text}': expected YYYYMMDD (e.g. 20241002)")
    return datetime.strptime(text, DATE_FORMAT).date()


def format_snapshot_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def snapshot_path(directory: Union[str, Path], prefix: str, snapshot_date: date,
                  extension: str = ".csv") -> Path:
    """Build ``<directory>/<prefix>_YYYYMMDD<extension>``."""
    return Path(directory) / f"{prefix}_{format_snapshot_date(snapshot_date)}{extension}"


def previous_day(effective_date: date) -> date:
    return effective_date - timedelta(days=1)


def resolve_comparison_files(directory: Union[str, Path], prefix: str, effective_date: date,
                             extension: str = ".csv") -> Tuple[Path, Path]:
    """Locate the previous-day and effective-date address files.
    
    Args:
        directory: Input directory
        prefix: Address file prefix
        effective_date: Date of the current snapshot
        extension: File extension
        
    Returns:
        ``(previous_path, current_path)``
        
    Raises:
        ResolutionError: Either file is missing
    """
    prior = previous_day(effective_date)
    previous_path = snapshot_path(directory, prefix, prior, extension)
    if not previous_path.is_file():
        raise ResolutionError(
            f"Previous-day address file not found: {previous_path}. The effective date "
            f"{format_snapshot_date(effective_date)} requires the prior day's snapshot "
            f"({format_snapshot_date(prior)}) for comparison.",
            {"path": str(previous_path), "effective_date": format_snapshot_date(effective_date)}
        )
    
    current_path = snapshot_path(directory, prefix, effective_date, extension)
    if not current_path.is_file():
        raise ResolutionError(
            f"Effective-date address file not found: {current_path}",
            {"path": str(current_path), "effective_date": format_snapshot_date(effective_date)}
        )
    
    return previous_path, current_path


def resolve_as_of_date(sorted_dates: Sequence[date], target: date) -> date:
    """Return the greatest date in ``sorted_dates`` that is on or before ``target``.
    
    Args:
        sorted_dates: Available snapshot dates, ascending
        target: Processing date
        
    Raises:
        ResolutionError: No available date is on or before ``target``
    """
    index = bisect_right(sorted_dates, target)
    if index == 0:
        if sorted_dates:
            detail = f"earliest available is {format_snapshot_date(sorted_dates[0])}"
        else:
            detail = "no snapshots available"
        raise ResolutionError(
            f"No customer snapshot dated on or before {format_snapshot_date(target)} ({detail})",
            {"target_date": format_snapshot_date(target)}
        )
    return sorted_dates[index - 1]


def discover_snapshot_dates(directory: Union[str, Path], prefix: str,
                            extension: str = ".csv") -> List[date]:
    """List the dates of all ``<prefix>_YYYYMMDD<extension>`` files in ``directory``.
    
    Names whose date part is not a valid calendar date are ignored.
    
    Returns:
        Dates in ascending order
        
    Raises:
        ResolutionError: The directory cannot be listed
    """
    pattern = re.compile(re.escape(prefix) + r'_([0-9]{8})' + re.escape(extension))
    dates = []
    
    try:
        entries = list(Path(directory).iterdir())
    except OSError as e:
        raise ResolutionError(
            f"Cannot list input directory {directory}: {e.strerror or e}",
            {"path": str(directory)}
        ) from e
    
    for entry in entries:
        match = pattern.fullmatch(entry.name)
        if not match or not entry.is_file():
            continue
        try:
            dates.append(parse_snapshot_date(match.group(1)))
        except ValueError:
            continue
    
    dates.sort()
    return dates


def require_minimum_dates(dates: Sequence[date], prefix: str, minimum: int = 2) -> None:
    """Ensure range mode has a baseline plus at least one date to process.
    
    Raises:
        ResolutionError: Fewer than ``minimum`` dates were discovered
    """
    if len(dates) < minimum:
        raise ResolutionError(
            f"At least {minimum} {prefix} snapshots are required (a baseline and one "
            f"processing date); found {len(dates)}",
            {"prefix": prefix, "found": len(dates)}
        )
