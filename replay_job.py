#!/usr/bin/env python3
"""Replay job: run a file of raw exchange messages through the candle transform."""

import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from crypto_transform.config import RunnerConfig, TransformConfig  # noqa: E402
from crypto_transform.models.record import Record  # noqa: E402
from crypto_transform.models.results import ReplayResult  # noqa: E402
from crypto_transform.transform.candle_transform import CandleTransform, RecordWriter  # noqa: E402


class StdoutWriter:
    """Writes records to stdout as JSON lines."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def write(self, record: Record) -> None:
        line = {
            "key": record.key.decode("utf-8") if record.key else None,
            "value": json.loads(record.value) if record.value else None,
        }
        self.stream.write(json.dumps(line) + "\n")


def replay(lines: Iterable[bytes], transform: CandleTransform, writer: RecordWriter) -> ReplayResult:
    """Transform each non-blank line and write the resulting records.

    Args:
        lines: Raw messages, one per line
        transform: Candle transform
        writer: Destination for candle records

    Returns:
        ReplayResult with message and record counts
    """
    start_time = time.monotonic()
    messages_read = 0
    records_written = 0
    dropped = 0

    for line in lines:
        raw = line.strip()
        if not raw:
            continue
        messages_read += 1
        result = transform.process(raw, writer)
        records_written += result.records_written
        if not result.accepted:
            dropped += 1

    execution_time = int((time.monotonic() - start_time) * 1000)
    return ReplayResult(
        messages_read=messages_read,
        records_written=records_written,
        dropped=dropped,
        execution_time_ms=execution_time,
    )


def main():
    """Replay REPLAY_FILE through the transform."""
    logger.info("🚀 Starting replay job...")

    try:
        replay_file = os.getenv("REPLAY_FILE", "")
        if not replay_file:
            raise ValueError(
                "REPLAY_FILE is not set.\n"
                "  - Set REPLAY_FILE to a file with one raw exchange message per line"
            )
        if not Path(replay_file).exists():
            raise ValueError(f"Replay file not found: {replay_file}")

        transform_config = TransformConfig.from_env()
        transform = CandleTransform(transform_config)
        logger.info("✅ Transform configuration loaded")

        if os.getenv("REPLAY_PUBLISH", "false").lower() == "true":
            from crypto_transform.publishers.pubsub_writer import PubSubRecordWriter

            runner_config = RunnerConfig.from_env()
            runner_config.validate()
            writer = PubSubRecordWriter(runner_config.project_id, runner_config.output_topic)
            logger.info(f"   - Publishing to {runner_config.output_topic}")
        else:
            writer = StdoutWriter()
            logger.info("   - Writing records to stdout")

        with open(replay_file, "rb") as f:
            result = replay(f, transform, writer)

        logger.info(f"✅ Replay completed: {result}")
        sys.exit(0)

    except Exception as e:
        logger.error(f"❌ Replay failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
