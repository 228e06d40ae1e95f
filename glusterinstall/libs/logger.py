"""
Logging configuration for the installer
Every message goes to the append-only log file; the console only shows
messages at or above the verbosity threshold chosen on the command line
"""
import inspect
import logging
import sys
from pathlib import Path
DEFAULT_LOGGER_NAME = "glusterinstall"
DEFAULT_LOG_FILE = "/var/log/glusterfs-cluster-install.log"

# Verbosity values accepted by --verbose
VERBOSE_DEBUG = 0
VERBOSE_INFO = 1
VERBOSE_SUMMARY = 2
VERBOSE_REPORT = 3
VERBOSE_QUIET = 9

# Levels between the standard ones for the summary and final report output
SUMMARY = 25
REPORT = 35
logging.addLevelName(SUMMARY, "SUMMARY")
logging.addLevelName(REPORT, "REPORT")

_VERBOSITY_LEVELS = {
    VERBOSE_DEBUG: logging.DEBUG,
    VERBOSE_INFO: logging.INFO,
    VERBOSE_SUMMARY: SUMMARY,
    VERBOSE_REPORT: REPORT,
    VERBOSE_QUIET: logging.ERROR,
}


def verbosity_to_level(verbose: int) -> int:
    """
    Map a --verbose value to the console logging level
    Args:
        verbose: 0=debug, 1=info, 2=summary, 3=report-only, 9=quiet
    Returns:
        Logging level for the console handler
    """
    if verbose in _VERBOSITY_LEVELS:
        return _VERBOSITY_LEVELS[verbose]
    if verbose < VERBOSE_DEBUG:
        return logging.DEBUG
    return logging.ERROR


def setup_logging(level=SUMMARY, log_file=None, format_string=None):
    """
    Setup logging configuration
    Args:
        level: Console logging level (default: SUMMARY)
        log_file: Optional path to log file, always written at DEBUG and appended to
        format_string: Custom format string for the log file
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)-40s - %(levelname)-7s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(format_string, datefmt=date_format))
        root_logger.addHandler(file_handler)
    # paramiko logs every channel event at DEBUG
    logging.getLogger("paramiko").setLevel(logging.WARNING)
    return root_logger


def get_logger(name=None):
    """
    Get a logger instance for a module
    Args:
        name: Logger name (default: None, uses calling module name)
    Returns:
        Logger instance
    """
    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        if caller:
            name = caller.f_globals.get("__name__", DEFAULT_LOGGER_NAME)
        else:
            name = DEFAULT_LOGGER_NAME
    return logging.getLogger(name)


def init_logger(verbose=VERBOSE_SUMMARY, log_file=DEFAULT_LOG_FILE):
    """
    Initialize logging once at startup
    Args:
        verbose: --verbose value controlling console output
        log_file: Log file path; a bare file name is resolved against the cwd
    """
    if log_file:
        log_file = Path(log_file)
        if not log_file.is_absolute():
            log_file = Path.cwd() / log_file
    setup_logging(level=verbosity_to_level(verbose), log_file=log_file)
    return logging.getLogger(DEFAULT_LOGGER_NAME)
