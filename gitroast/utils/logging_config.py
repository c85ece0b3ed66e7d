"""
Logging Configuration

Centralized logging setup for gitroast: console output plus a size-rotating
log file, with every record stamped with the current pipeline run id.
"""

import os
import sys
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from gitroast.utils.trace_context import TraceContext

LOG_FORMAT = '%(asctime)s - [%(trace_id)s] - %(name)s - %(levelname)s - %(message)s'


class TraceFormatter(logging.Formatter):
    """
    Formatter that includes the pipeline run id in log messages.
    """

    def format(self, record):
        trace_id = getattr(record, 'trace_id', None) or TraceContext.get_trace_id()
        record.trace_id = trace_id or 'no-trace'
        return super().format(record)


def setup_logging(log_dir=None, log_level=None):
    """
    Set up logging configuration for the application.

    Args:
        log_dir: Directory to store log files. If None, uses LOG_DIR from environment
            or a 'logs' directory in the project root.
        log_level: Logging level. If None, uses LOG_LEVEL from environment or defaults to INFO.

    Returns:
        Logger: Root logger
    """
    if log_level is None:
        log_level_str = os.environ.get('LOG_LEVEL', 'INFO').upper()
        log_level = logging.getLevelName(log_level_str)
        if not isinstance(log_level, int):
            log_level = logging.INFO

    if log_dir is None:
        env_log_dir = os.environ.get('LOG_DIR')
        if env_log_dir:
            log_dir = Path(env_log_dir)
        else:
            project_root = Path(os.path.abspath(os.path.join(os.path.dirname(__file__), '../../')))
            log_dir = project_root / 'logs'

    os.makedirs(log_dir, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicate logs
    if root_logger.handlers:
        root_logger.handlers.clear()

    formatter = TraceFormatter(LOG_FORMAT)

    log_file = os.path.join(log_dir, 'gitroast.log')
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10*1024*1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO
    logging.getLogger('httpx').setLevel(max(log_level, logging.WARNING))

    root_logger.info(f"Logging initialized. Log file: {log_file}")
    return root_logger
