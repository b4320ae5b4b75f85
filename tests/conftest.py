from datetime import datetime, timezone

import pytest

from wenshi.services.envelope import EnvelopeCodec
from wenshi.services.file_store import FileStore
from wenshi.services.validator import ContentValidator

FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)
FIXED_NOW_TEXT = "2024-01-15T10:30:00Z"


@pytest.fixture
def validator():
    return ContentValidator()


@pytest.fixture
def codec(validator):
    """Codec whose current instant is always FIXED_NOW."""
    return EnvelopeCodec(validator=validator, clock=lambda: FIXED_NOW)


@pytest.fixture
def file_store(codec, validator):
    return FileStore(codec=codec, validator=validator, files_root="", default_filename="untitled.wen")


@pytest.fixture
def sample_envelope():
    """Envelope as written by the editor."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<wenshi ver="1.0" createdAt="2024-01-01T00:00:00Z" modifiedAt="2024-01-02T08:00:00+08:00">'
        "春眠不觉晓，\r\n处处闻啼鸟。</wenshi>"
    )
