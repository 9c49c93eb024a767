from __future__ import annotations


class WorkflowError(RuntimeError):
    """Base class for failures raised by the transcription workflow itself."""


class DownloadError(WorkflowError):
    pass


class TranscriptionFailedError(WorkflowError):
    def __init__(self, job_name: str, reason: str | None) -> None:
        self.job_name = job_name
        self.reason = reason or "no failure reason reported"
        super().__init__(f"Transcription job {job_name} failed: {self.reason}")


class TranscriptionTimeoutError(WorkflowError):
    pass


class TranscriptUriError(WorkflowError):
    pass


class TranscriptFormatError(WorkflowError):
    pass


class CleanupError(WorkflowError):
    pass
