import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """Quiet wins over verbose: errors only."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.INFO

def setup_logging(verbose: bool = False, quiet: bool = False, log_path: Optional[Path] = None) -> logging.Logger:
    """
    Setup logging configuration for audioprobe.

    Log records go to stderr so that reports written to stdout stay clean.
    Returns configured logger instance.

    Args:
        verbose: If True, enable DEBUG level logging (per-file diagnostics)
        quiet: If True, only errors are logged
        log_path: Optional path to an additional log file
    """
    level = resolve_level(verbose=verbose, quiet=quiet)

    handlers: list = [logging.StreamHandler(sys.stderr)]
    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger("audioprobe")
    logger.debug(f"Logging initialized (level={logging.getLevelName(level)}, file={log_path or 'none'})")

    return logger
