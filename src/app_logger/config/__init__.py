"""
Package: config
Description: Environment settings and per-logger configuration.
"""

from app_logger.config.settings import LoggerConfig, LoggerSettings, get_settings

__all__ = ["LoggerConfig", "LoggerSettings", "get_settings"]
