"""
Package: sinks
Description: Destinations for formatted log records.

- stream: rendered text to a local stream
- remote: structured events to a remote log service
"""

from app_logger.sinks.base import IngestionClient, Sink
from app_logger.sinks.remote import RemoteSink
from app_logger.sinks.stream import StreamSink

__all__ = ["IngestionClient", "RemoteSink", "Sink", "StreamSink"]
