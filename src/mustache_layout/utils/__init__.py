"""Utilities shared by the library and the CLI."""

from ._logging import LogFormatType, create_logger, open_logger

__all__ = ["LogFormatType", "create_logger", "open_logger"]
