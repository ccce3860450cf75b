"""Address Changes Module Entry Point

This module serves as the command-line interface and main entry point for the
address changes module.

Usage:
    python -m modules.address_changes.main --effective-date 20241002
    python -m modules.address_changes.main --input-dir data/in --output-dir data/out

Exit codes: 0 on success, 1 when processing fails, 2 for invalid arguments.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from src.config.config_loader import ConfigLoader
from src.exceptions import ETLBaseException, ETLConfigurationError
from src.utils import setup_logging, log_performance
from .date_resolution import parse_snapshot_date
from .models import AddressChangesSettings
from .processor import AddressChangeProcessor

logger = logging.getLogger(__name__)


def _date_argument(text: str):
    try:
        return parse_snapshot_date(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Address Changes ETL - compare daily address snapshots and write "
                    "NEW/UPDATED/DELETED change logs"
    )
    parser.add_argument(
        "--input-dir",
        help="Directory containing addresses_YYYYMMDD.csv and customers_YYYYMMDD.csv "
             "(overrides configuration)"
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for address_changes_YYYYMMDD.csv files (overrides configuration)"
    )
    parser.add_argument(
        "--effective-date",
        type=_date_argument,
        help="Date to process (YYYYMMDD), compared against the previous calendar day. "
             "When omitted every snapshot in the input directory is processed in order"
    )
    parser.add_argument(
        "--environment",
        choices=["development", "production"],
        default="development",
        help="Environment to run against (default: development)"
    )
    parser.add_argument(
        "--config-dir",
        default="config",
        help="Directory containing environment_config.json (default: config)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides configuration)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Detect changes without writing change log files"
    )
    return parser


def _create_processor(parsed_args: argparse.Namespace) -> AddressChangeProcessor:
    """Build the processor from configuration, or from flags alone when no
    configuration file exists and both directories were given."""
    config_loader = ConfigLoader(config_dir=parsed_args.config_dir)
    overrides = {"input_dir": parsed_args.input_dir, "output_dir": parsed_args.output_dir}
    
    try:
        logging_config = config_loader.get_section(parsed_args.environment, "logging")
    except ETLConfigurationError:
        if not (parsed_args.input_dir and parsed_args.output_dir):
            raise
        setup_logging(parsed_args.environment, parsed_args.log_level or "INFO")
        logger.info(f"No configuration in {parsed_args.config_dir}, using command-line directories")
        settings = AddressChangesSettings(
            input_dir=Path(parsed_args.input_dir),
            output_dir=Path(parsed_args.output_dir),
        )
        return AddressChangeProcessor(
            None, parsed_args.environment, parsed_args.effective_date, settings=settings
        )
    
    setup_logging(
        environment=parsed_args.environment,
        log_level=parsed_args.log_level or logging_config.get("level", "INFO"),
        log_dir=logging_config.get("log_dir")
    )
    return AddressChangeProcessor(
        config_loader, parsed_args.environment, parsed_args.effective_date, overrides=overrides
    )


@log_performance
def run(parsed_args: argparse.Namespace) -> int:
    processor = _create_processor(parsed_args)
    result = processor.process(dry_run=parsed_args.dry_run)
    
    if not result.success:
        for error in result.errors:
            logger.error(f"ETL failed: {error}")
        return 1
    return 0


def main(args: Optional[list] = None) -> int:
    """Main entry point for the address changes module.
    
    Args:
        args: Command line arguments (defaults to sys.argv)
        
    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)
    
    try:
        return run(parsed_args)
    except ETLBaseException as e:
        # Logging may not be configured yet
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
