"""
Centralized Configuration Module

Connection defaults, logging configuration, and validation helpers.
Import from here instead of hardcoding values.
"""

import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# ============================================================================
# Load default .env at module import time
# ============================================================================
# This ensures ConnectionDefaults can access env vars immediately
load_dotenv()

# ============================================================================
# Environment Loading
# ============================================================================

def load_environment(env_file: Optional[str] = None):
    """
    Load environment variables from .env file.

    Args:
        env_file: Optional path to .env file. If None, uses default .env
    """
    if env_file:
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=True)
            logging.getLogger(__name__).info(f"Loaded environment from: {env_file}")
        else:
            logging.getLogger(__name__).warning(f"Environment file not found: {env_file}")
    else:
        # Reload default .env
        load_dotenv(override=True)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


# ============================================================================
# Connection Defaults
# ============================================================================

class ConnectionDefaults:
    """Default connection settings for BMC endpoints"""

    PORT = int(os.getenv("BMC_PORT", "443"))
    USE_SSL = _env_bool("BMC_USE_SSL", "true")
    VERIFY_SSL = _env_bool("BMC_VERIFY_SSL", "false")

    # Retry policy
    RETRY_COUNT = int(os.getenv("BMC_RETRY_COUNT", "3"))
    RETRY_DELAY = float(os.getenv("BMC_RETRY_DELAY", "1"))
    RETRY_STATUSES = frozenset({408, 429, 500, 502, 503, 504})
    RETRY_METHODS = frozenset({"GET", "PUT", "DELETE", "POST", "PATCH"})

    # Timeouts (seconds)
    REQUEST_TIMEOUT = float(os.getenv("BMC_REQUEST_TIMEOUT", "30"))
    OPEN_TIMEOUT = float(os.getenv("BMC_OPEN_TIMEOUT", "10"))
    PROBE_TIMEOUT = 2

    # Vendor detection uses shorter timeouts and fewer retries
    DETECT_TIMEOUT = float(os.getenv("BMC_DETECT_TIMEOUT", "5"))
    DETECT_RETRY_COUNT = 2
    DETECT_RETRY_DELAY = 0.5

    SERVICE_ROOT = "/redfish/v1"


# ============================================================================
# Logging Configuration
# ============================================================================

class LogConfig:
    """Logging configuration for BMC sessions"""

    LOG_LEVEL = os.getenv("BMC_LOG_LEVEL", "INFO").upper()

    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    # Verbose format adds the source location of each record
    DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

    LOG_FILE = os.getenv("BMC_LOG_FILE")
    LOG_FILE_MAX_BYTES = int(os.getenv("BMC_LOG_FILE_MAX_BYTES", "10485760"))  # 10MB
    LOG_FILE_BACKUP_COUNT = int(os.getenv("BMC_LOG_FILE_BACKUP_COUNT", "5"))

    # HTTP libraries log every connection; keep them quiet unless tracing the wire
    HTTP_DEBUG = _env_bool("BMC_HTTP_DEBUG", "false")
    HTTP_LOGGERS = ("urllib3", "requests")


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure logging for bmcbridge.

    Calling it again with the same log file does not add a second file handler.

    Args:
        verbose: Enable DEBUG logging with source locations
        log_file: Optional log file path (defaults to BMC_LOG_FILE)

    Returns:
        The package logger
    """
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, LogConfig.LOG_LEVEL, logging.INFO)

    log_format = LogConfig.DETAILED_FORMAT if verbose else LogConfig.LOG_FORMAT

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=LogConfig.LOG_DATE_FORMAT
    )
    package_logger = logging.getLogger("bmcbridge")
    package_logger.setLevel(log_level)

    file_path = log_file or LogConfig.LOG_FILE
    if file_path:
        from logging.handlers import RotatingFileHandler

        root = logging.getLogger()
        target = os.path.abspath(file_path)
        if not any(isinstance(h, RotatingFileHandler) and h.baseFilename == target for h in root.handlers):
            file_handler = RotatingFileHandler(
                file_path,
                maxBytes=LogConfig.LOG_FILE_MAX_BYTES,
                backupCount=LogConfig.LOG_FILE_BACKUP_COUNT
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(log_format, LogConfig.LOG_DATE_FORMAT))
            root.addHandler(file_handler)
            logger.info(f"Logging to file: {file_path}")

    http_level = logging.DEBUG if LogConfig.HTTP_DEBUG else logging.WARNING
    for name in LogConfig.HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    logger.info(f"Logging configured: level={logging.getLevelName(log_level)}")
    return package_logger


# Initialize logger for this module
logger = logging.getLogger(__name__)


# ============================================================================
# Validation
# ============================================================================

def validate_connection_options(host: Optional[str], port: int, retry_count: int, retry_delay: float):
    """
    Validate connection options before a client is built.
    Raises ValueError listing every problem found.
    """
    errors = []

    if not host:
        errors.append("Host cannot be empty")

    if not isinstance(port, int) or not 0 < port < 65536:
        errors.append(f"Port must be between 1 and 65535 (got {port!r})")

    if retry_count < 0:
        errors.append(f"Retry count cannot be negative (got {retry_count})")

    if retry_delay < 0:
        errors.append(f"Retry delay cannot be negative (got {retry_delay})")

    if errors:
        error_msg = "Connection options validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)


# ============================================================================
# Export commonly used configs
# ============================================================================

__all__ = [
    'ConnectionDefaults',
    'LogConfig',
    'load_environment',
    'setup_logging',
    'validate_connection_options',
]
