from __future__ import annotations

import logging

from transcribe_example.errors import TranscriptionFailedError, TranscriptUriError
from transcribe_example.services.fetcher import MediaFetcher
from transcribe_example.services.results import ResultStore
from transcribe_example.services.staging import StagingBucket
from transcribe_example.services.transcriber import AWSTranscriber, build_job_spec
from transcribe_example.types import WorkflowResult

logger = logging.getLogger(__name__)


class TranscriptionWorkflow:
    """Download, stage, transcribe, retrieve and clean up, in that order."""

    def __init__(
        self,
        *,
        fetcher: MediaFetcher,
        staging: StagingBucket,
        transcriber: AWSTranscriber,
        results: ResultStore,
        language_code: str = "en-US",
        cleanup_on_failure: bool = True,
    ) -> None:
        self.fetcher = fetcher
        self.staging = staging
        self.transcriber = transcriber
        self.results = results
        self.language_code = language_code
        self.cleanup_on_failure = cleanup_on_failure

    def run(self, source_url: str) -> WorkflowResult:
        media_path = self.fetcher.fetch(source_url)
        artifacts = self.results.artifacts_for(media_path)

        bucket = self.staging.create()
        logger.info("Created staging bucket %s", bucket)
        try:
            media_uri = self.staging.upload(media_path)
            spec = build_job_spec(
                bucket=bucket,
                media_key=media_path.name,
                media_uri=media_uri,
                language_code=self.language_code,
            )
            self.transcriber.start(spec)
            logger.info("Started transcription job %s", spec.name)

            state = self.transcriber.wait(spec.name)
            if state.status == "FAILED":
                raise TranscriptionFailedError(spec.name, state.failure_reason)
            if not state.transcript_uri:
                raise TranscriptUriError(f"Transcription job {spec.name} reported no transcript URI")

            text = self.results.retrieve(state.transcript_uri, artifacts)
        except BaseException:
            if self.cleanup_on_failure:
                self._cleanup_after_failure(bucket)
            else:
                logger.warning("Leaving staging bucket %s in place after failure", bucket)
            raise

        self.staging.destroy()
        logger.info("Deleted staging bucket %s", bucket)
        return WorkflowResult(
            bucket_name=bucket,
            job=state,
            artifacts=artifacts,
            transcript_text=text,
        )

    def _cleanup_after_failure(self, bucket: str) -> None:
        try:
            self.staging.destroy()
            logger.info("Deleted staging bucket %s after failure", bucket)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Could not delete staging bucket %s", bucket)
