from __future__ import annotations

import logging
import sys

import boto3
import httpx
from botocore.exceptions import BotoCoreError, ClientError

from transcribe_example.config import Settings, load_settings
from transcribe_example.errors import WorkflowError
from transcribe_example.services.fetcher import MediaFetcher
from transcribe_example.services.results import ResultStore
from transcribe_example.services.staging import StagingBucket
from transcribe_example.services.transcriber import AWSTranscriber
from transcribe_example.workflow import TranscriptionWorkflow

logger = logging.getLogger(__name__)


def build_workflow(settings: Settings) -> TranscriptionWorkflow:
    s3 = boto3.client("s3", region_name=settings.aws_region)
    transcribe = boto3.client("transcribe", region_name=settings.aws_region)

    return TranscriptionWorkflow(
        fetcher=MediaFetcher(settings.data_dir, timeout_seconds=settings.http_timeout_seconds),
        staging=StagingBucket(s3, region=settings.aws_region, prefix=settings.bucket_prefix),
        transcriber=AWSTranscriber(
            transcribe,
            poll_interval_seconds=settings.poll_interval_seconds,
            max_wait_seconds=settings.max_wait_seconds,
        ),
        results=ResultStore(s3, settings.data_dir),
        language_code=settings.language_code,
        cleanup_on_failure=settings.cleanup_on_failure,
    )


def cli() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    workflow = build_workflow(settings)
    try:
        result = workflow.run(settings.source_media_url)
    except (WorkflowError, ClientError, BotoCoreError, httpx.HTTPError) as exc:
        logger.error("Transcription workflow failed: %s", exc)
        sys.exit(1)

    logger.info("Transcript written to %s", result.artifacts.transcript_text_path)


if __name__ == "__main__":
    cli()
