"""Pub/Sub record writer for candle records."""

import logging

from google.cloud import pubsub_v1
from google.cloud.pubsub_v1 import types

from ..models.record import Record

logger = logging.getLogger(__name__)


class PublishError(Exception):
    """Raised when a record cannot be published."""

    pass


class PubSubRecordWriter:
    """Writes transform output records to a GCP Pub/Sub topic."""

    def __init__(self, project_id: str, topic: str, publisher=None):
        """Initialize Pub/Sub writer.

        Args:
            project_id: GCP project ID
            topic: Output topic name (e.g., "crypto-candles")
            publisher: Optional PublisherClient for testing
        """
        self.project_id = project_id
        self.topic = topic
        if publisher is None:
            # Enable message ordering to support ordering keys
            publisher_options = types.PublisherOptions(enable_message_ordering=True)
            publisher = pubsub_v1.PublisherClient(publisher_options=publisher_options)
        self.publisher = publisher
        self.topic_path = self.publisher.topic_path(project_id, topic)

    def write(self, record: Record) -> None:
        """Publish a record and wait for the broker to accept it.

        The record key becomes the ordering key, so candles from one exchange
        stay in order.

        Raises:
            PublishError: If the record has no value or publishing fails
        """
        if record.value is None:
            raise PublishError("Cannot publish a record without a value")

        ordering_key = record.key.decode("utf-8").lower() if record.key else ""
        try:
            future = self.publisher.publish(
                self.topic_path,
                record.value,
                ordering_key=ordering_key,
            )
            message_id = future.result()
        except Exception as e:
            if ordering_key:
                # A failed publish pauses the ordering key until resumed
                self.publisher.resume_publish(self.topic_path, ordering_key)
            logger.error(f"Failed to publish record to {self.topic}: {e}", exc_info=True)
            raise PublishError(f"Failed to publish record to {self.topic}: {e}") from e

        logger.info(
            f"📤 Published {ordering_key or 'unkeyed'} record to {self.topic} "
            f"(message_id: {message_id})"
        )
