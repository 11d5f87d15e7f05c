"""
Package: formatting
Description: Argument classification, JSON conversion and line rendering.

Nothing in this package performs I/O.
"""

from app_logger.formatting.formatter import format_arguments, split_arguments
from app_logger.formatting.pretty import render_pretty
from app_logger.formatting.renderer import (
    DefaultRenderer,
    FormatterOverride,
    OverrideRenderer,
    Renderer,
    build_renderer,
    render_block,
)
from app_logger.formatting.serialize import Serializable, register_adapter, to_structured

__all__ = [
    "DefaultRenderer",
    "FormatterOverride",
    "OverrideRenderer",
    "Renderer",
    "Serializable",
    "build_renderer",
    "format_arguments",
    "register_adapter",
    "render_block",
    "render_pretty",
    "split_arguments",
    "to_structured",
]
