from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

JobStatus = Literal["QUEUED", "IN_PROGRESS", "COMPLETED", "FAILED"]
TERMINAL_STATUSES: frozenset[str] = frozenset({"COMPLETED", "FAILED"})


@dataclass(frozen=True, slots=True)
class TranscriptionJobSpec:
    name: str
    language_code: str
    media_uri: str
    media_format: str
    output_bucket: str


@dataclass(slots=True)
class TranscriptionJobState:
    name: str
    status: str
    transcript_uri: str | None = None
    failure_reason: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass(slots=True)
class LocalArtifacts:
    media_path: Path
    transcript_json_path: Path
    transcript_text_path: Path


@dataclass(slots=True)
class WorkflowResult:
    bucket_name: str
    job: TranscriptionJobState
    artifacts: LocalArtifacts
    transcript_text: str
