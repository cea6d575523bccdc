# -*- coding: utf-8 -*-
"""Logging Service Implementation.

Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

This module configures logging for the server. Console output goes to stderr,
since stdout carries the MCP stdio protocol. JSON file logging is optional.
Levels follow RFC 5424 as used by MCP.
"""

# Standard
import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Dict, Optional, TYPE_CHECKING

# Third-Party
from pythonjsonlogger import jsonlogger  # You may need to install python-json-logger package

# First-Party
from mcp_graphql.models import LogLevel

if TYPE_CHECKING:
    from mcp_graphql.config import Settings

PACKAGE_LOGGER = "mcp_graphql"

# Create a text formatter
text_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# Create a JSON formatter
json_formatter = jsonlogger.JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")

# Global handlers will be created lazily
_file_handler: Optional[RotatingFileHandler] = None
_text_handler: Optional[logging.StreamHandler] = None

# RFC 5424 levels without a stdlib counterpart collapse onto the nearest one
_STDLIB_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.NOTICE: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.ALERT: logging.CRITICAL,
    LogLevel.EMERGENCY: logging.CRITICAL,
}


def _get_file_handler(settings: "Settings") -> RotatingFileHandler:
    """Get or create the file handler.

    Args:
        settings: Settings carrying the log file location.

    Returns:
        RotatingFileHandler: The file handler for JSON logging.

    Raises:
        ValueError: If file logging is disabled or no log file specified.
    """
    global _file_handler  # pylint: disable=global-statement
    if _file_handler is None:
        if not settings.log_to_file or not settings.log_file:
            raise ValueError("File logging is disabled or no log file specified")

        if settings.log_folder:
            os.makedirs(settings.log_folder, exist_ok=True)
            log_path = os.path.join(settings.log_folder, settings.log_file)
        else:
            log_path = settings.log_file

        _file_handler = RotatingFileHandler(log_path, maxBytes=1024 * 1024, backupCount=5)
        _file_handler.setFormatter(json_formatter)
    return _file_handler


def _get_text_handler() -> logging.StreamHandler:
    """Get or create the text handler.

    Returns:
        logging.StreamHandler: The stream handler for console logging (stderr).
    """
    global _text_handler  # pylint: disable=global-statement
    if _text_handler is None:
        _text_handler = logging.StreamHandler()
        _text_handler.setFormatter(text_formatter)
    return _text_handler


def to_stdlib_level(level: LogLevel) -> int:
    """Map an RFC 5424 level onto a stdlib logging level.

    Args:
        level: MCP log level.

    Returns:
        The stdlib numeric level.

    Examples:
        >>> to_stdlib_level(LogLevel.NOTICE) == logging.INFO
        True
        >>> to_stdlib_level(LogLevel.EMERGENCY) == logging.CRITICAL
        True
    """
    return _STDLIB_LEVELS[LogLevel(level)]


class LoggingService:
    """Logging service.

    Handlers are attached once to the package logger; loggers returned by
    ``get_logger`` are its children and propagate to it.
    """

    def __init__(self):
        """Initialize logging service."""
        self._level = LogLevel.INFO
        self._loggers: Dict[str, logging.Logger] = {}

    async def initialize(self, settings: Optional["Settings"] = None) -> None:
        """Attach handlers to the package logger and apply the configured level.

        Args:
            settings: Optional settings; without them only console logging is set up.

        Examples:
            >>> import asyncio
            >>> service = LoggingService()
            >>> asyncio.run(service.initialize())
        """
        root = logging.getLogger(PACKAGE_LOGGER)
        self._loggers[PACKAGE_LOGGER] = root
        text_handler = _get_text_handler()
        if text_handler not in root.handlers:
            root.addHandler(text_handler)
        root.propagate = False

        if settings is not None and settings.log_to_file and settings.log_file:
            try:
                file_handler = _get_file_handler(settings)
                if file_handler not in root.handlers:
                    root.addHandler(file_handler)
                root.info(f"File logging enabled: {settings.log_folder or '.'}/{settings.log_file}")
            except OSError as e:
                root.warning(f"Failed to initialize file logging: {e}")
        else:
            root.debug("File logging disabled - logging to stderr only")

        await self.set_level(settings.log_level if settings is not None else self._level)
        root.debug("Logging service initialized")

    async def shutdown(self) -> None:
        """Shutdown logging service.

        Examples:
            >>> import asyncio
            >>> service = LoggingService()
            >>> asyncio.run(service.shutdown())
        """
        for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
            handler.flush()

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create logger instance.

        Args:
            name: Logger name

        Returns:
            Logger instance

        Examples:
            >>> service = LoggingService()
            >>> logger = service.get_logger('mcp_graphql.test')
            >>> import logging
            >>> isinstance(logger, logging.Logger)
            True
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]

    async def set_level(self, level: LogLevel) -> None:
        """Set minimum log level.

        This updates the package logger and every logger obtained from this service.

        Args:
            level: New log level

        Examples:
            >>> import asyncio
            >>> service = LoggingService()
            >>> asyncio.run(service.set_level(LogLevel.DEBUG))
            >>> service.level
            <LogLevel.DEBUG: 'debug'>
        """
        self._level = LogLevel(level)
        stdlib_level = to_stdlib_level(self._level)
        logging.getLogger(PACKAGE_LOGGER).setLevel(stdlib_level)
        for logger in self._loggers.values():
            logger.setLevel(stdlib_level)

    @property
    def level(self) -> LogLevel:
        """Return the current minimum level."""
        return self._level
