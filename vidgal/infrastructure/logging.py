import logging
from pathlib import Path

def setup_logging(log_path: Path, debug: bool = False) -> logging.Logger:
    """
    Setup logging configuration for vidgal.

    Creates the log file's parent directory if needed.
    Returns configured logger instance.

    Args:
        log_path: Path to the log file
        debug: If True, enable DEBUG level logging (rejected records, raw counts)
    """
    log_file = Path(log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(log_file)],
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized: {log_file} (debug={'ON' if debug else 'OFF'})")

    return logger
