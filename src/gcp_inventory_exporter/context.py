"""
Run context: the configuration and logger handed to every component of a run
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import InventoryConfig
from .utils.logging_config import BufferHandler, get_logger, setup_logging


@dataclass
class RunContext:
    """Explicitly constructed per run and passed down at construction time"""
    config: InventoryConfig
    logger: logging.Logger = field(default_factory=get_logger)
    buffer: Optional[BufferHandler] = None

    @classmethod
    def create(cls,
               config: InventoryConfig,
               configure_logging: bool = True,
               capture_logs: bool = False) -> 'RunContext':
        if configure_logging:
            setup_logging(
                log_level=config.log_level,
                log_file=config.log_file,
                log_format=config.log_format
            )
        context = cls(config=config, logger=get_logger())
        if capture_logs:
            context.start_capture()
        return context

    def start_capture(self) -> None:
        """Attach a buffer that keeps this run's log lines"""
        if self.buffer is not None:
            return
        if self.logger.level == logging.NOTSET:
            self.logger.setLevel(self.config.log_level.upper())
        self.buffer = BufferHandler()
        self.logger.addHandler(self.buffer)

    def child(self, name: str) -> logging.Logger:
        return self.logger.getChild(name)

    def captured_logs(self) -> List[str]:
        if self.buffer is None:
            return []
        return self.buffer.drain()

    def close(self) -> None:
        if self.buffer is not None:
            self.logger.removeHandler(self.buffer)
            self.buffer = None
