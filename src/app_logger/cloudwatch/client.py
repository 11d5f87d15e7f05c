"""
Module: client.py
Description: CloudWatch Logs client for remote log destinations.

Creates log groups and log streams on demand and appends events with
put_log_events, translating botocore errors into the library's error
taxonomy.

Key Components:
- CloudWatchLogsClient: IngestionClient backed by boto3's logs client
- ensure_destination(): find or create the log group and log stream
- append(): put_log_events with sequence token handling
- current_token(): re-read the stream's upload sequence token

Dependencies: boto3, botocore
Author: App Logger Team
"""

import re
from typing import Any, Dict, Optional, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app_logger.errors import DestinationError, StaleTokenError, TransportError
from app_logger.formatting.renderer import render_event
from app_logger.models.destination import DestinationHandle
from app_logger.models.record import LogEvent
from app_logger.sinks.base import IngestionClient
from app_logger.utils.logger import get_logger

logger = get_logger(__name__)

LOG_GROUP_NAME_PATTERN = re.compile(r"^[.\-_/#A-Za-z0-9]{1,512}$")
LOG_STREAM_NAME_PATTERN = re.compile(r"^[^:*]{1,512}$")


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


def _error_message(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Message", str(error))


class CloudWatchLogsClient(IngestionClient):
    """
    CloudWatch Logs implementation of the ingestion client.

    Attributes:
        logs: boto3 CloudWatch Logs client

    Example:
        >>> client = CloudWatchLogsClient(region_name="us-east-1")
        >>> handle = client.ensure_destination("orders-service", "worker-1")
        >>> token = client.append(handle, events)
    """

    def __init__(
        self,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        logs_client: Any = None
    ):
        """
        Initialize CloudWatch Logs client.

        Args:
            region_name: AWS region, boto3's default resolution when omitted
            endpoint_url: Alternative endpoint (for local stacks)
            logs_client: Preconfigured boto3 logs client to use instead

        Raises:
            DestinationError: If boto3 cannot build the client (no region configured)
        """
        if logs_client is not None:
            self.logs = logs_client
        else:
            try:
                self.logs = boto3.client('logs', region_name=region_name, endpoint_url=endpoint_url)
            except BotoCoreError as e:
                logger.error("Failed to create CloudWatch Logs client", error=str(e))
                raise DestinationError(f"Cannot create CloudWatch Logs client: {e}") from e

        logger.debug(
            "CloudWatch Logs client initialized",
            region_name=self.logs.meta.region_name
        )

    def ensure_destination(self, log_group_name: str, log_stream_name: str) -> DestinationHandle:
        """
        Find or create a log group and log stream.

        Args:
            log_group_name: Log group to write to
            log_stream_name: Log stream inside the group

        Returns:
            DestinationHandle carrying the stream's current sequence token

        Raises:
            ValueError: If a name is not valid for CloudWatch Logs
            DestinationError: If the group or stream cannot be found or created
        """
        if not isinstance(log_group_name, str) or not LOG_GROUP_NAME_PATTERN.match(log_group_name):
            raise ValueError(
                "log_group_name must be 1-512 characters of letters, numbers, '.', '-', '_', '/' or '#'"
            )
        if not isinstance(log_stream_name, str) or not LOG_STREAM_NAME_PATTERN.match(log_stream_name):
            raise ValueError("log_stream_name must be 1-512 characters and contain no ':' or '*'")

        try:
            self._ensure_log_group(log_group_name)
            self._ensure_log_stream(log_group_name, log_stream_name)
            token = self._read_token(log_group_name, log_stream_name)

        except ClientError as e:
            logger.error(
                "Failed to prepare CloudWatch log destination",
                log_group_name=log_group_name,
                log_stream_name=log_stream_name,
                error_code=_error_code(e),
                error_message=_error_message(e)
            )
            raise DestinationError(
                f"Cannot prepare log group {log_group_name}: {_error_message(e)}",
                destination=log_group_name
            ) from e

        except BotoCoreError as e:
            logger.error(
                "Unexpected error preparing CloudWatch log destination",
                log_group_name=log_group_name,
                error=str(e)
            )
            raise DestinationError(
                f"Cannot reach CloudWatch Logs for {log_group_name}: {e}",
                destination=log_group_name
            ) from e

        return DestinationHandle(
            log_group_name=log_group_name,
            log_stream_name=log_stream_name,
            sequence_token=token
        )

    def _ensure_log_group(self, log_group_name: str) -> None:
        paginator = self.logs.get_paginator('describe_log_groups')
        for page in paginator.paginate(logGroupNamePrefix=log_group_name):
            for group in page.get('logGroups', []):
                if group['logGroupName'] == log_group_name:
                    logger.debug("Log group found", log_group_name=log_group_name)
                    return

        try:
            self.logs.create_log_group(logGroupName=log_group_name)
            logger.info("Log group created", log_group_name=log_group_name)
        except ClientError as e:
            # Created concurrently by another writer.
            if _error_code(e) != 'ResourceAlreadyExistsException':
                raise

    def _ensure_log_stream(self, log_group_name: str, log_stream_name: str) -> None:
        try:
            self.logs.create_log_stream(
                logGroupName=log_group_name,
                logStreamName=log_stream_name
            )
            logger.info(
                "Log stream created",
                log_group_name=log_group_name,
                log_stream_name=log_stream_name
            )
        except ClientError as e:
            if _error_code(e) != 'ResourceAlreadyExistsException':
                raise

    def _read_token(self, log_group_name: str, log_stream_name: str) -> Optional[str]:
        response = self.logs.describe_log_streams(
            logGroupName=log_group_name,
            logStreamNamePrefix=log_stream_name
        )
        for stream in response.get('logStreams', []):
            if stream['logStreamName'] == log_stream_name:
                return stream.get('uploadSequenceToken')
        return None

    def current_token(self, handle: DestinationHandle) -> Optional[str]:
        try:
            return self._read_token(handle.log_group_name, handle.log_stream_name)
        except ClientError as e:
            raise TransportError(
                f"Cannot read sequence token for {handle.log_group_name}: {_error_message(e)}",
                destination=handle.log_group_name
            ) from e
        except BotoCoreError as e:
            raise TransportError(
                f"Cannot reach CloudWatch Logs for {handle.log_group_name}: {e}",
                destination=handle.log_group_name
            ) from e

    def append(
        self,
        handle: DestinationHandle,
        events: Sequence[LogEvent],
        token: Optional[str] = None
    ) -> Optional[str]:
        """
        Append events to the log stream.

        Args:
            handle: Destination returned by ensure_destination()
            events: Events in the order they must be stored
            token: Sequence token from the previous append, if any

        Returns:
            Sequence token to use for the next append

        Raises:
            StaleTokenError: If CloudWatch rejects the sequence token
            TransportError: On any other CloudWatch or network failure
        """
        if not events:
            return token

        params: Dict[str, Any] = {
            'logGroupName': handle.log_group_name,
            'logStreamName': handle.log_stream_name,
            'logEvents': [
                {'timestamp': event.timestamp, 'message': render_event(event)}
                for event in events
            ],
        }
        if token:
            params['sequenceToken'] = token

        try:
            response = self.logs.put_log_events(**params)

        except ClientError as e:
            code = _error_code(e)

            if code == 'InvalidSequenceTokenException':
                raise StaleTokenError(
                    f"Sequence token rejected by {handle.log_group_name}",
                    destination=handle.log_group_name,
                    expected_token=e.response.get('expectedSequenceToken')
                ) from e

            if code == 'DataAlreadyAcceptedException':
                # The same batch was stored by an earlier attempt.
                logger.warning(
                    "Log events already accepted",
                    log_group_name=handle.log_group_name,
                    log_stream_name=handle.log_stream_name
                )
                return e.response.get('expectedSequenceToken', token)

            logger.error(
                "Failed to put log events",
                log_group_name=handle.log_group_name,
                log_stream_name=handle.log_stream_name,
                error_code=code,
                error_message=_error_message(e)
            )
            raise TransportError(
                f"Cannot append to {handle.log_group_name}: {_error_message(e)}",
                destination=handle.log_group_name
            ) from e

        except BotoCoreError as e:
            logger.error(
                "Unexpected error putting log events",
                log_group_name=handle.log_group_name,
                error=str(e)
            )
            raise TransportError(
                f"Cannot reach CloudWatch Logs for {handle.log_group_name}: {e}",
                destination=handle.log_group_name
            ) from e

        rejected = response.get('rejectedLogEventsInfo')
        if rejected:
            logger.warning(
                "Some log events were rejected",
                log_group_name=handle.log_group_name,
                rejected=rejected
            )

        return response.get('nextSequenceToken', token)

    def close(self) -> None:
        self.logs.close()
