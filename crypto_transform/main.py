"""Streaming candle transform service.

Pulls raw exchange messages from the crypto-raw subscription, normalizes each
into a candle, and publishes the candle to the output topic.
"""

import logging
import signal
import sys
from concurrent.futures import TimeoutError
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Imports after logging setup (required for proper logging configuration)
from google.cloud import pubsub_v1  # noqa: E402

from crypto_transform.config import RunnerConfig, TransformConfig  # noqa: E402
from crypto_transform.publishers.pubsub_writer import PubSubRecordWriter  # noqa: E402
from crypto_transform.transform.candle_transform import CandleTransform  # noqa: E402

# Global flag for graceful shutdown
shutdown = False


def signal_handler(sig, frame):
    """Handle shutdown signals gracefully."""
    global shutdown
    logger.info("\n🛑 Shutting down...")
    shutdown = True


def make_callback(transform: CandleTransform, writer: PubSubRecordWriter):
    """Build the subscriber callback for one transform and writer.

    Dropped messages are acked like accepted ones. A message is only nacked
    when the transform or the publish raises, so Pub/Sub redelivers it.
    """

    def callback(message) -> None:
        try:
            result = transform.process(message.data, writer)
        except Exception as e:
            logger.error(f"Failed to transform message {message.message_id}: {e}", exc_info=True)
            message.nack()
            return

        if not result.accepted:
            logger.info(f"Dropped message {message.message_id} ({result.reason})")
        message.ack()

    return callback


def main():
    """Main entry point for the streaming transform."""
    logger.info("🚀 Starting crypto candle transform service...")

    try:
        # Load configuration
        runner_config = RunnerConfig.from_env()
        runner_config.validate()
        transform_config = TransformConfig.from_env()
        logger.info("✅ Configuration loaded")
        logger.info(f"   - Project: {runner_config.project_id}")
        logger.info(f"   - Input subscription: {runner_config.input_subscription}")
        logger.info(f"   - Output topic: {runner_config.output_topic}")
        logger.info(f"   - Binance timestamp source: {transform_config.binance_timestamp_source}")
        logger.info(f"   - Coinbase timestamp source: {transform_config.coinbase_timestamp_source}")

        transform = CandleTransform(transform_config)
        writer = PubSubRecordWriter(runner_config.project_id, runner_config.output_topic)
        logger.info("✅ Transform and writer initialized")

        subscriber = pubsub_v1.SubscriberClient()
        subscription_path = subscriber.subscription_path(
            runner_config.project_id, runner_config.input_subscription
        )

        # Register signal handlers
        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        streaming_pull = subscriber.subscribe(
            subscription_path, callback=make_callback(transform, writer)
        )
        logger.info(f"📡 Listening on {subscription_path}...")
        logger.info("   Press Ctrl+C to stop\n")

        with subscriber:
            while not shutdown:
                try:
                    streaming_pull.result(timeout=1)
                except TimeoutError:
                    continue
            streaming_pull.cancel()
            streaming_pull.result()

    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("✅ Service stopped")


if __name__ == "__main__":
    main()
