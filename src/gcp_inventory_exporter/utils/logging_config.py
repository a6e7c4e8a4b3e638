"""
Logging configuration for the GCP inventory exporter
"""
import functools
import json
import logging
import logging.config
import sys
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import colorlog

LOGGER_NAME = 'gcp_inventory_exporter'

_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'taskName', 'message', 'asctime',
])


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.utcnow().isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'thread': record.threadName,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Extra fields, e.g. resource_kind/project/scope on collection errors
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class BufferHandler(logging.Handler):
    """Keeps formatted log lines in memory so a run can hand them back"""

    def __init__(self, level=logging.NOTSET):
        super().__init__(level)
        self.buffer: List[str] = []
        self.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)-8s %(message)s', '%Y-%m-%d %H:%M:%S'
        ))

    def emit(self, record: logging.LogRecord):
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return
        # emit() already runs under the handler lock
        self.buffer.append(line)

    def drain(self) -> List[str]:
        """Return the captured lines and clear the buffer"""
        self.acquire()
        try:
            lines, self.buffer = self.buffer, []
        finally:
            self.release()
        return lines


def setup_logging(log_level: str = 'INFO',
                  log_file: Optional[str] = None,
                  log_format: str = 'console',
                  enable_color: bool = True) -> None:
    """
    Setup logging configuration

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        log_format: Format type ('console', 'json', 'detailed')
        enable_color: Enable colored output for console
    """
    log_level = log_level.upper()

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {},
        'handlers': {},
        'loggers': {
            LOGGER_NAME: {
                'level': log_level,
                'handlers': [],
                'propagate': False
            },
            'google': {
                'level': 'WARNING',
                'handlers': [],
                'propagate': False
            },
            'urllib3': {
                'level': 'WARNING',
                'handlers': [],
                'propagate': False
            }
        },
        'root': {
            'level': log_level,
            'handlers': []
        }
    }

    if log_format == 'json':
        config['formatters']['json'] = {
            '()': StructuredFormatter
        }
        formatter_name = 'json'
    elif log_format == 'detailed':
        config['formatters']['detailed'] = {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - '
                      '%(filename)s:%(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }
        formatter_name = 'detailed'
    else:  # console
        if enable_color and sys.stderr.isatty():
            config['formatters']['console'] = {
                '()': colorlog.ColoredFormatter,
                'format': '%(log_color)s%(levelname)-8s%(reset)s %(message)s',
                'log_colors': {
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white'
                }
            }
        else:
            config['formatters']['console'] = {
                'format': '%(levelname)-8s %(message)s'
            }
        formatter_name = 'console'

    config['handlers']['console'] = {
        'class': 'logging.StreamHandler',
        'level': log_level,
        'formatter': formatter_name,
        'stream': 'ext://sys.stderr'
    }

    for logger_name in config['loggers']:
        config['loggers'][logger_name]['handlers'].append('console')
    config['root']['handlers'].append('console')

    if log_file:
        config['formatters']['file'] = {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }

        config['handlers']['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': log_level,
            'formatter': 'file' if log_format != 'json' else 'json',
            'filename': log_file,
            'maxBytes': 100 * 1024 * 1024,  # 100MB
            'backupCount': 5,
            'encoding': 'utf-8'
        }

        for logger_name in config['loggers']:
            config['loggers'][logger_name]['handlers'].append('file')
        config['root']['handlers'].append('file')

    logging.config.dictConfig(config)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger below the package logger"""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def log_execution_time(func):
    """Decorator to log function execution time on the instance logger"""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        logger = getattr(self, 'logger', None) or logging.getLogger(func.__module__)
        start_time = time.time()

        try:
            result = func(self, *args, **kwargs)
            execution_time = time.time() - start_time
            logger.debug(f"{func.__qualname__} completed in {execution_time:.2f} seconds "
                         f"({threading.current_thread().name})")
            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(f"{func.__qualname__} failed after {execution_time:.2f} seconds: {e}")
            raise

    return wrapper
