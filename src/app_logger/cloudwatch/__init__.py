"""
Package: cloudwatch
Description: CloudWatch Logs ingestion client.
"""

from app_logger.cloudwatch.client import CloudWatchLogsClient

__all__ = ["CloudWatchLogsClient"]
