from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

from transcribe_example.errors import TranscriptFormatError, TranscriptUriError
from transcribe_example.services.aws_logging import log_request, log_response
from transcribe_example.types import LocalArtifacts

logger = logging.getLogger(__name__)


def parse_transcript_uri(uri: str) -> tuple[str, str]:
    """Split a Transcribe output URI into ``(bucket, key)``.

    Transcribe reports path-style HTTPS URLs such as
    ``https://s3.us-east-1.amazonaws.com/<bucket>/<key>``; ``s3://`` URIs are
    accepted too.
    """
    parsed = urlparse(uri.strip())
    if parsed.scheme == "s3":
        bucket, key = parsed.netloc, parsed.path.lstrip("/")
    else:
        parts = parsed.path.lstrip("/").split("/", 1)
        bucket, key = parts[0], parts[1] if len(parts) > 1 else ""

    if not bucket or not key:
        raise TranscriptUriError(f"Cannot map transcript URI to a bucket and key: {uri}")
    return unquote(bucket), unquote(key)


def transcript_text(document: dict[str, Any]) -> str:
    results = document.get("results")
    transcripts = results.get("transcripts") if isinstance(results, dict) else None
    if not isinstance(transcripts, list):
        raise TranscriptFormatError("Transcript document has no results.transcripts list")
    return "\n".join(str(segment.get("transcript") or "") for segment in transcripts)


class ResultStore:
    def __init__(self, s3: Any, data_dir: Path) -> None:
        self.s3 = s3
        self.data_dir = data_dir

    def artifacts_for(self, media_path: Path) -> LocalArtifacts:
        basename = media_path.name
        return LocalArtifacts(
            media_path=media_path,
            transcript_json_path=self.data_dir / f"{basename}.transcript.json",
            transcript_text_path=self.data_dir / f"{basename}.transcript.txt",
        )

    def retrieve(self, transcript_uri: str, artifacts: LocalArtifacts) -> str:
        bucket, key = parse_transcript_uri(transcript_uri)
        artifacts.transcript_json_path.unlink(missing_ok=True)

        params = {"Bucket": bucket, "Key": key}
        log_request(logger, "get_object", params)
        response = self.s3.get_object(**params)
        log_response(logger, "get_object", response)
        body = response["Body"].read()

        artifacts.transcript_json_path.parent.mkdir(parents=True, exist_ok=True)
        artifacts.transcript_json_path.write_bytes(body)

        try:
            document = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TranscriptFormatError(f"Transcript object {key} is not valid JSON") from exc
        if not isinstance(document, dict):
            raise TranscriptFormatError(f"Transcript object {key} is not a JSON object")

        text = transcript_text(document)
        artifacts.transcript_text_path.write_text(text, encoding="utf-8")
        logger.info("Wrote transcript text to %s", artifacts.transcript_text_path)
        return text
