from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from iothub_query_client.core.credentials import SasTokenCredentials  # noqa: E402


@pytest.fixture
def credentials() -> SasTokenCredentials:
    return SasTokenCredentials("SharedAccessSignature sr=hub.example.net&sig=abc&se=1")
