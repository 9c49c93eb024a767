from __future__ import annotations

import logging
import time
from pathlib import PurePosixPath
from typing import Any, Callable

from transcribe_example.errors import TranscriptionTimeoutError
from transcribe_example.services.aws_logging import log_request, log_response
from transcribe_example.types import TranscriptionJobSpec, TranscriptionJobState

logger = logging.getLogger(__name__)


def build_job_spec(
    *,
    bucket: str,
    media_key: str,
    media_uri: str,
    language_code: str,
) -> TranscriptionJobSpec:
    return TranscriptionJobSpec(
        name=f"{bucket}-{media_key}",
        language_code=language_code,
        media_uri=media_uri,
        media_format=PurePosixPath(media_key).suffix.lstrip(".").lower(),
        output_bucket=bucket,
    )


class AWSTranscriber:
    def __init__(
        self,
        client: Any,
        poll_interval_seconds: float = 3.0,
        max_wait_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.poll_interval_seconds = poll_interval_seconds
        self.max_wait_seconds = max_wait_seconds
        self.sleep = sleep

    def start(self, spec: TranscriptionJobSpec) -> None:
        params = {
            "TranscriptionJobName": spec.name,
            "LanguageCode": spec.language_code,
            "Media": {"MediaFileUri": spec.media_uri},
            "MediaFormat": spec.media_format,
            "OutputBucketName": spec.output_bucket,
        }
        log_request(logger, "start_transcription_job", params)
        response = self.client.start_transcription_job(**params)
        log_response(logger, "start_transcription_job", response)

    def get(self, job_name: str) -> TranscriptionJobState:
        params = {"TranscriptionJobName": job_name}
        log_request(logger, "get_transcription_job", params)
        response = self.client.get_transcription_job(**params)
        log_response(logger, "get_transcription_job", response)

        job = response.get("TranscriptionJob") or {}
        transcript = job.get("Transcript") or {}
        return TranscriptionJobState(
            name=str(job.get("TranscriptionJobName") or job_name),
            status=str(job.get("TranscriptionJobStatus") or "").upper(),
            transcript_uri=transcript.get("TranscriptFileUri") or None,
            failure_reason=job.get("FailureReason") or None,
        )

    def wait(self, job_name: str) -> TranscriptionJobState:
        started = time.monotonic()
        while True:
            state = self.get(job_name)
            if state.is_terminal:
                logger.info("Transcription job %s finished with status %s", job_name, state.status)
                return state

            if (
                self.max_wait_seconds is not None
                and time.monotonic() - started >= self.max_wait_seconds
            ):
                raise TranscriptionTimeoutError(
                    f"Transcription job {job_name} still {state.status} after {self.max_wait_seconds}s"
                )

            logger.info("Transcription job %s is %s", job_name, state.status or "pending")
            self.sleep(self.poll_interval_seconds)
