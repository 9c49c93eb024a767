import json
from pathlib import Path

import pytest

from fakes import FakeS3
from transcribe_example.errors import TranscriptFormatError, TranscriptUriError
from transcribe_example.services.results import ResultStore, parse_transcript_uri, transcript_text


def test_transcript_text_joins_segments_in_order() -> None:
    document = {
        "results": {
            "transcripts": [
                {"transcript": "The birch canoe slid on the smooth planks."},
                {"transcript": "Glue the sheet to the dark blue background."},
                {"transcript": "It's easy to tell the depth of a well."},
            ]
        }
    }

    assert transcript_text(document) == (
        "The birch canoe slid on the smooth planks.\n"
        "Glue the sheet to the dark blue background.\n"
        "It's easy to tell the depth of a well."
    )


def test_transcript_text_rejects_missing_results() -> None:
    with pytest.raises(TranscriptFormatError):
        transcript_text({"status": "COMPLETED"})


def test_parse_path_style_uri() -> None:
    uri = "https://s3.us-east-1.amazonaws.com/demo-1/demo-1-clip.wav.json"
    assert parse_transcript_uri(uri) == ("demo-1", "demo-1-clip.wav.json")


def test_parse_s3_uri_with_nested_key() -> None:
    assert parse_transcript_uri("s3://demo-1/out/job.json") == ("demo-1", "out/job.json")


def test_parse_uri_without_key_fails() -> None:
    with pytest.raises(TranscriptUriError):
        parse_transcript_uri("https://s3.amazonaws.com/demo-1")


def test_retrieve_writes_json_and_text(tmp_path: Path, fake_s3: FakeS3) -> None:
    raw = json.dumps({"results": {"transcripts": [{"transcript": "one"}, {"transcript": "two"}]}}).encode()
    fake_s3.buckets["demo-1"] = {"job.json": raw}
    store = ResultStore(fake_s3, tmp_path)
    artifacts = store.artifacts_for(tmp_path / "clip.wav")

    text = store.retrieve("https://s3.us-east-1.amazonaws.com/demo-1/job.json", artifacts)

    assert text == "one\ntwo"
    assert artifacts.transcript_json_path == tmp_path / "clip.wav.transcript.json"
    assert artifacts.transcript_json_path.read_bytes() == raw
    assert artifacts.transcript_text_path.read_text(encoding="utf-8") == "one\ntwo"


def test_retrieve_rejects_invalid_json(tmp_path: Path, fake_s3: FakeS3) -> None:
    fake_s3.buckets["demo-1"] = {"job.json": b"not json"}
    store = ResultStore(fake_s3, tmp_path)
    artifacts = store.artifacts_for(tmp_path / "clip.wav")

    with pytest.raises(TranscriptFormatError):
        store.retrieve("s3://demo-1/job.json", artifacts)

    assert not artifacts.transcript_text_path.exists()
