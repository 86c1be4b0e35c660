"""Publisher writing calendar documents to S3 or a local directory."""
import logging
import os
from typing import Optional

import boto3
from botocore.exceptions import ClientError

from processor.models import CalendarDocument, PublishResult

logger = logging.getLogger(__name__)


class CalendarPublisher:
    """Writer for calendar output artifacts."""

    CONTENT_TYPE = 'text/calendar; charset=utf-8'
    CACHE_CONTROL = 'max-age=300'

    def __init__(
        self,
        bucket: Optional[str] = None,
        prefix: str = '',
        output_dir: str = 'public'
    ):
        """
        Initialize the publisher.

        When a bucket is given documents are uploaded to S3, otherwise they
        are written below output_dir.

        Args:
            bucket: S3 bucket name (optional)
            prefix: Key prefix inside the bucket
            output_dir: Local output directory used without a bucket
        """
        self.bucket = bucket
        self.prefix = prefix.strip('/')
        self.output_dir = output_dir
        self.s3 = boto3.client('s3') if bucket else None

        target = f"s3://{bucket}/{self.prefix}" if bucket else output_dir
        logger.info(f"Initialized CalendarPublisher for: {target}")

    def publish(self, document: CalendarDocument, filename: str) -> PublishResult:
        """
        Serialize and write one calendar document.

        Args:
            document: Calendar document to write
            filename: Output file name, e.g. "calendar.ics"

        Returns:
            PublishResult with the written location and size

        Raises:
            ClientError: If the S3 upload fails
            OSError: If the local file cannot be written
        """
        body = document.to_ics().encode('utf-8')

        if self.bucket:
            location = self._put_object(filename, body)
        else:
            location = self._write_file(filename, body)

        logger.info(
            f"Written: {location} ({len(document)} events, {len(body)} bytes)"
        )
        return PublishResult(location=location, bytes_written=len(body))

    def _put_object(self, filename: str, body: bytes) -> str:
        key = f"{self.prefix}/{filename}" if self.prefix else filename
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=self.CONTENT_TYPE,
                CacheControl=self.CACHE_CONTROL
            )
        except ClientError as e:
            logger.error(f"Error uploading {key} to bucket {self.bucket}: {e}")
            raise
        return f"s3://{self.bucket}/{key}"

    def _write_file(self, filename: str, body: bytes) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        path = os.path.join(self.output_dir, filename)
        # CRLF terminators must reach disk unchanged
        with open(path, 'wb') as f:
            f.write(body)
        return path
