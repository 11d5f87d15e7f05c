"""
Package: utils
Description: Shared helpers.

Current utilities:
- logger: structlog diagnostics configuration and helpers
"""

__all__ = []
