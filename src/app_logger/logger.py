"""
Module: logger.py
Description: Leveled logger writing structured data next to log messages.

Any arguments passed after the message of a log call are written as JSON
instead of being interpolated into the text, so a log backend can index
and query them by field while the message stays readable.

Key Components:
- Logger: debug/info/warn/error/fatal call surface
- Severity gate: calls below the configured level return a falsy
  LogResult without formatting or I/O
- Sink selection: a stream (default standard output) or a CloudWatch
  log group

Example:
    >>> logger = Logger(sys.stdout)
    >>> logger.debug("Starting to process order.", {"id": "1234"})
    DEBUG: Starting to process order.
    {"id":"1234","message":"Starting to process order."}

Dependencies: pydantic (config), boto3 (remote sink)
Author: App Logger Team
"""

from typing import Any, Optional, TextIO, Union

from app_logger.cloudwatch.client import CloudWatchLogsClient
from app_logger.config.settings import LoggerConfig, LoggerSettings, default_stream_name, get_settings
from app_logger.formatting.formatter import format_arguments
from app_logger.formatting.renderer import FormatterOverride, build_renderer
from app_logger.models.record import LogResult
from app_logger.models.severity import Severity, SeverityLike, parse_severity, should_emit
from app_logger.sinks.base import IngestionClient, Sink
from app_logger.sinks.remote import RemoteSink
from app_logger.sinks.stream import StreamSink
from app_logger.utils.logger import configure_logging, owns_configuration


class Logger:
    """
    Structured leveled logger.

    The first positional argument selects the sink: a string is a
    CloudWatch log group name, anything else a writable stream.

    Attributes:
        config: Current LoggerConfig
        sink: Sink receiving emitted records

    Example:
        >>> logger = Logger("orders-service", level="info")
        >>> logger.info("Order completed", order)
    """

    def __init__(
        self,
        target: Union[TextIO, str, None] = None,
        *,
        output: Optional[TextIO] = None,
        destination_name: Optional[str] = None,
        level: SeverityLike = Severity.DEBUG,
        pretty: bool = False,
        formatter: Optional[FormatterOverride] = None,
        progname: Optional[str] = None,
        stream_name: Optional[str] = None,
        client: Optional[IngestionClient] = None,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None
    ):
        """
        Initialize logger.

        Args:
            target: Stream or log group name (shorthand for output/destination_name)
            output: Writable stream for rendered text
            destination_name: CloudWatch log group name
            level: Minimum severity to emit
            pretty: Also write a pretty rendering of data arguments
            formatter: Custom formatter(severity, time, progname, message) -> str
            progname: Context passed to the custom formatter
            stream_name: CloudWatch log stream, <hostname>-<pid> by default
            client: Ingestion client for the remote sink
            region_name: AWS region for the default CloudWatch client
            endpoint_url: Endpoint override for the default CloudWatch client

        Raises:
            ValueError: If the options are invalid or select both sinks
            DestinationError: If the default CloudWatch client cannot be created
        """
        if target is not None:
            if isinstance(target, str):
                if destination_name is not None:
                    raise ValueError("destination given both positionally and as destination_name")
                destination_name = target
            else:
                if output is not None:
                    raise ValueError("output given both positionally and as output")
                output = target

        self.config = LoggerConfig(
            min_severity=level,
            pretty=pretty,
            output=output,
            destination_name=destination_name,
            stream_name=stream_name,
            formatter=formatter,
            progname=progname
        )

        if self.config.is_remote:
            self.sink: Sink = RemoteSink(
                log_group_name=self.config.destination_name,
                log_stream_name=self.config.stream_name or default_stream_name(),
                client=client or CloudWatchLogsClient(region_name=region_name, endpoint_url=endpoint_url)
            )
        else:
            self.sink = StreamSink(output, renderer=build_renderer(formatter))

    @classmethod
    def from_settings(
        cls,
        settings: Optional[LoggerSettings] = None,
        output: Optional[TextIO] = None,
        client: Optional[IngestionClient] = None,
        **options: Any
    ) -> "Logger":
        """
        Build a logger from LoggerSettings.

        The remote sink is used when the settings name a log group and no
        output stream is passed. Diagnostics logging is configured from
        the settings as well, unless the host application configured
        structlog itself.

        Args:
            settings: Settings to use, loaded from the environment when omitted
            output: Stream overriding the configured log group
            client: Ingestion client for the remote sink
            **options: Extra Logger options (formatter, progname)

        Returns:
            Configured Logger
        """
        settings = settings or get_settings()
        if owns_configuration():
            configure_logging(settings.diagnostics_level, settings.diagnostics_json)

        if output is None and settings.log_group_name:
            return cls(
                destination_name=settings.log_group_name,
                level=settings.level,
                pretty=settings.pretty,
                stream_name=settings.log_stream_name,
                client=client,
                region_name=settings.aws_region,
                endpoint_url=settings.endpoint_url,
                **options
            )

        return cls(output=output, level=settings.level, pretty=settings.pretty, **options)

    @property
    def level(self) -> Severity:
        return self.config.min_severity

    @level.setter
    def level(self, value: SeverityLike) -> None:
        self.config = self.config.model_copy(update={"min_severity": parse_severity(value)})

    @property
    def pretty(self) -> bool:
        return self.config.pretty

    @property
    def progname(self) -> Optional[str]:
        return self.config.progname

    @progname.setter
    def progname(self, value: Optional[str]) -> None:
        self.config = self.config.model_copy(update={"progname": value})

    @property
    def formatter(self) -> Optional[FormatterOverride]:
        return self.config.formatter

    @formatter.setter
    def formatter(self, value: Optional[FormatterOverride]) -> None:
        """Swap the rendering strategy of a stream logger."""
        if not isinstance(self.sink, StreamSink):
            raise ValueError("formatter only applies to stream output")
        renderer = build_renderer(value)
        self.config = self.config.model_copy(update={"formatter": value})
        self.sink.renderer = renderer

    def is_enabled_for(self, severity: SeverityLike) -> bool:
        """Return True when calls at severity would be emitted."""
        return should_emit(parse_severity(severity), self.config.min_severity)

    def log(self, severity: SeverityLike, *args: Any) -> LogResult:
        """
        Log a call at the given severity.

        Args:
            severity: Severity of the call
            *args: Optional leading message, then data arguments

        Returns:
            LogResult, truthy when emitted, falsy when below the threshold

        Raises:
            SerializationError: If a data argument cannot be serialized
            LogIOError: If writing to the stream fails
            DestinationError: If the remote destination cannot be prepared
            TransportError: If the remote append fails
        """
        severity = parse_severity(severity)
        config = self.config

        if not should_emit(severity, config.min_severity):
            return LogResult(severity=severity, emitted=False)

        record = format_arguments(args, pretty=config.pretty)
        self.sink.emit(record, severity, progname=config.progname)

        return LogResult(severity=severity, emitted=True, record=record)

    def debug(self, *args: Any) -> LogResult:
        return self.log(Severity.DEBUG, *args)

    def info(self, *args: Any) -> LogResult:
        return self.log(Severity.INFO, *args)

    def warn(self, *args: Any) -> LogResult:
        return self.log(Severity.WARN, *args)

    def error(self, *args: Any) -> LogResult:
        return self.log(Severity.ERROR, *args)

    def fatal(self, *args: Any) -> LogResult:
        return self.log(Severity.FATAL, *args)

    warning = warn
    critical = fatal

    def close(self) -> None:
        """Flush the stream or close the remote client."""
        self.sink.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self):
        target = self.config.destination_name or type(self.sink).__name__
        return f"Logger(target='{target}', level={self.level.name})"
