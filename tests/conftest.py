from __future__ import annotations

import pytest

from fakes import FakeS3


@pytest.fixture
def fake_s3() -> FakeS3:
    return FakeS3()
