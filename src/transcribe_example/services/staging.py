from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import Any, Callable

from transcribe_example.errors import CleanupError
from transcribe_example.services.aws_logging import log_request, log_response

logger = logging.getLogger(__name__)

DELETE_BATCH_SIZE = 1000
_MAX_BUCKET_NAME = 63


def _sanitize_bucket_prefix(value: str) -> str:
    clean = re.sub(r"[^a-z0-9.-]+", "-", value.strip().lower())
    clean = clean.strip(".-")
    return clean or "transcribe"


def make_bucket_name(prefix: str, now_ms: int) -> str:
    suffix = f"-{now_ms}"
    head = _sanitize_bucket_prefix(prefix)[: _MAX_BUCKET_NAME - len(suffix)].rstrip(".-")
    return f"{head or 'transcribe'}{suffix}"


def media_file_uri(region: str, bucket: str, key: str) -> str:
    return f"https://s3-{region}.amazonaws.com/{bucket}/{key}"


class StagingBucket:
    """A temporary S3 bucket holding the media file and the job output.

    The bucket is created by :meth:`create` and must be torn down with
    :meth:`destroy`, which empties it first.
    """

    def __init__(
        self,
        s3: Any,
        *,
        region: str,
        prefix: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.s3 = s3
        self.region = region
        self.prefix = prefix
        self.clock = clock
        self.name: str | None = None

    @property
    def exists(self) -> bool:
        return self.name is not None

    def create(self) -> str:
        name = make_bucket_name(self.prefix, int(self.clock() * 1000))
        params: dict[str, Any] = {"Bucket": name}
        if self.region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}

        log_request(logger, "create_bucket", params)
        response = self.s3.create_bucket(**params)
        log_response(logger, "create_bucket", response)
        self.name = name
        return name

    def upload(self, path: Path, key: str | None = None) -> str:
        bucket = self._require_name()
        object_key = key or path.name
        params = {"Bucket": bucket, "Key": object_key, "Body": path.read_bytes()}

        log_request(logger, "put_object", params)
        response = self.s3.put_object(**params)
        log_response(logger, "put_object", response)
        return media_file_uri(self.region, bucket, object_key)

    def list_keys(self) -> list[str]:
        bucket = self._require_name()
        keys: list[str] = []
        params: dict[str, Any] = {"Bucket": bucket}
        while True:
            log_request(logger, "list_objects_v2", params)
            response = self.s3.list_objects_v2(**params)
            log_response(logger, "list_objects_v2", response)

            keys.extend(str(item["Key"]) for item in response.get("Contents") or [])
            token = response.get("NextContinuationToken")
            if not response.get("IsTruncated") or not token:
                return keys
            params = {"Bucket": bucket, "ContinuationToken": token}

    def destroy(self) -> None:
        bucket = self._require_name()
        keys = self.list_keys()
        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            batch = keys[start : start + DELETE_BATCH_SIZE]
            params = {
                "Bucket": bucket,
                "Delete": {"Objects": [{"Key": key} for key in batch]},
            }
            log_request(logger, "delete_objects", params)
            response = self.s3.delete_objects(**params)
            log_response(logger, "delete_objects", response)

            errors = response.get("Errors") or []
            if errors:
                raise CleanupError(f"Failed to delete {len(errors)} object(s) from {bucket}: {errors[0]}")

        params = {"Bucket": bucket}
        log_request(logger, "delete_bucket", params)
        response = self.s3.delete_bucket(**params)
        log_response(logger, "delete_bucket", response)
        self.name = None

    def _require_name(self) -> str:
        if self.name is None:
            raise CleanupError("Staging bucket has not been created")
        return self.name
