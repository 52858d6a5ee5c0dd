"""
Logging System for the Symbolic Engine

Centralized logger with verbosity levels so library use stays quiet by
default while interactive front ends and test harnesses can turn on
operation-level detail.
"""

import logging
import sys
from typing import Optional
from enum import Enum
from datetime import datetime


class LogLevel(Enum):
    """Enumeration of logging levels for the symbolic engine"""
    SILENT = 0      # No output
    MINIMAL = 1     # Warnings and failures only
    MODERATE = 2    # Parsed expressions and operation results
    DETAILED = 3    # Every operation dispatched by the engine
    VERBOSE = 4     # All information including debug details


class CasLogger:
    """
    Centralized logger for the symbolic engine
    """

    def __init__(self, log_level: LogLevel = LogLevel.MINIMAL,
                 log_to_file: bool = False, log_file_path: Optional[str] = None):
        self.log_level = log_level
        self.log_to_file = log_to_file

        # Create logger
        self.logger = logging.getLogger('symbolic_cas')
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()  # Remove any existing handlers
        self.logger.propagate = False

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

        # Console handler
        if self.log_level != LogLevel.SILENT:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        # File handler (optional)
        if log_to_file:
            if log_file_path is None:
                log_file_path = f"symbolic_cas_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            file_handler = logging.FileHandler(log_file_path)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def _should_log(self, required_level: LogLevel) -> bool:
        """Check if message should be logged based on current log level"""
        return self.log_level.value >= required_level.value

    def info(self, message: str, required_level: LogLevel = LogLevel.MODERATE):
        """General information with configurable level"""
        if self._should_log(required_level):
            self.logger.info(message)

    def operation(self, name: str, detail: str):
        """Engine operation dispatch"""
        if self._should_log(LogLevel.DETAILED):
            self.logger.info(f"{name}: {detail}")

    def warning(self, message: str):
        """Warnings - shown from minimal level onwards"""
        if self._should_log(LogLevel.MINIMAL):
            self.logger.warning(message)

    def debug(self, message: str):
        """Debug information - only in verbose mode"""
        if self._should_log(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")


# Global logger instance
_global_logger: Optional[CasLogger] = None


def get_logger() -> CasLogger:
    """Get or create the global logger instance"""
    global _global_logger
    if _global_logger is None:
        _global_logger = CasLogger()
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global logging level"""
    global _global_logger
    if _global_logger is None:
        _global_logger = CasLogger(log_level=level)
    else:
        _global_logger.log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MINIMAL,
                      log_to_file: bool = False,
                      log_file_path: Optional[str] = None) -> CasLogger:
    """Configure the global logging system"""
    global _global_logger
    _global_logger = CasLogger(
        log_level=log_level,
        log_to_file=log_to_file,
        log_file_path=log_file_path
    )
    return _global_logger


# Convenience functions for common operations
def log_info(message: str, level: LogLevel = LogLevel.MODERATE):
    """Log info message at specified level"""
    get_logger().info(message, level)


def log_operation(name: str, detail: str):
    """Log an engine operation"""
    get_logger().operation(name, detail)


def log_warning(message: str):
    """Log warning message"""
    get_logger().warning(message)


def log_debug(message: str):
    """Log debug message"""
    get_logger().debug(message)
