"""
Module: stream.py
Description: Sink writing rendered log blocks to a file-like object.
"""

import sys
import threading
from typing import Optional, TextIO

from app_logger.errors import LogIOError
from app_logger.formatting.renderer import DefaultRenderer, Renderer
from app_logger.sinks.base import Sink


class StreamSink(Sink):
    """
    Writes each rendered block, newline-terminated, to a stream.

    The stream belongs to the caller: close() flushes it but leaves it open.

    Attributes:
        output: Writable text stream (standard output by default)
        renderer: Rendering strategy for records
    """

    def __init__(self, output: Optional[TextIO] = None, renderer: Optional[Renderer] = None):
        if output is not None and not callable(getattr(output, "write", None)):
            raise ValueError("output must be a writable stream")

        self.output = output if output is not None else sys.stdout
        self.renderer = renderer or DefaultRenderer()
        self._lock = threading.Lock()

    def emit(self, record, severity, progname=None) -> None:
        text = self.renderer.render(record, severity, progname)
        if not text.endswith("\n"):
            text += "\n"

        # One write per block keeps blocks from interleaving across threads.
        with self._lock:
            try:
                self.output.write(text)
                flush = getattr(self.output, "flush", None)
                if flush is not None:
                    flush()
            except (OSError, ValueError) as e:
                raise LogIOError(f"Failed to write log record: {e}") from e

    def close(self) -> None:
        if getattr(self.output, "closed", False):
            return
        flush = getattr(self.output, "flush", None)
        if flush is not None:
            flush()
