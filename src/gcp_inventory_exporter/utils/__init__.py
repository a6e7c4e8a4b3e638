"""Logging setup and field rendering helpers"""

from .logging_config import (
    BufferHandler,
    StructuredFormatter,
    get_logger,
    log_execution_time,
    setup_logging
)
from .normalize import (
    format_bool,
    format_int,
    join_references,
    remove_url_prefix,
    remove_url_prefixes
)
